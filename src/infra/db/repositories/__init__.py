from .base import BaseRepo
from .people_repo import PEOPLE_SCHEMA, PeopleRepo

__all__ = ["BaseRepo", "PEOPLE_SCHEMA", "PeopleRepo"]
