from __future__ import annotations

from core.dtos import PersonDTO

from .base import BaseRepo

PEOPLE_SCHEMA = """
CREATE TABLE IF NOT EXISTS people (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  age INTEGER
);
"""


class PeopleRepo(BaseRepo):
    def create_table(self) -> None:
        self.db.executescript(PEOPLE_SCHEMA)

    def add(self, name: str, age: int | None = None) -> int:
        return self.db.insert(
            "INSERT INTO people(name, age) VALUES (?, ?)",
            [name, age],
        )

    def get(self, person_id: int) -> PersonDTO | None:
        row = self._one(
            """
            SELECT id, name, age
            FROM people
            WHERE id = ?
            """,
            [person_id],
        )
        return PersonDTO.model_validate(row) if row else None

    def list_all(self) -> list[PersonDTO]:
        """People in insertion (id) order."""
        return [
            PersonDTO.model_validate(row)
            for row in self._iter(
                """
                SELECT id, name, age
                FROM people
                ORDER BY id
                """
            )
        ]

    def by_id(self) -> dict[int, PersonDTO]:
        return {person.id: person for person in self.list_all()}

    def count(self) -> int:
        row = self._one("SELECT COUNT(*) AS n FROM people")
        return int(row["n"]) if row else 0
