class InventoryError(Exception):
    """Base class for inventory engine failures."""


class PersistenceError(InventoryError):
    """A primary write could not be committed."""


class InventoryConflictError(PersistenceError):
    """An inventory record already exists for the (product, supplier) pair."""

    def __init__(self, product_id, supplier_id):
        super().__init__(
            "Inventory already exists for product {} and supplier {}".format(product_id, supplier_id)
        )
        self.product_id = product_id
        self.supplier_id = supplier_id


class LegacyMigrationError(InventoryError):
    """The legacy inventory snapshot could not be read."""


__all__ = [
    "InventoryConflictError",
    "InventoryError",
    "LegacyMigrationError",
    "PersistenceError",
]
