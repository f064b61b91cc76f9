from crudkit.repositories.crud_repository import CrudRepository

__all__ = ["CrudRepository"]
