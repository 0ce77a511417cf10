import pytest
from pydantic import ValidationError

from core.dtos import PersonDTO


def test_person_from_row_mapping():
    dto = PersonDTO.model_validate({"id": 1, "name": "  Alice ", "age": 30})
    assert dto.name == "Alice"
    assert dto.as_row() == (1, "Alice", 30)


def test_person_age_is_optional():
    dto = PersonDTO.model_validate({"id": 2, "name": "Bob", "age": None})
    assert dto.as_row() == (2, "Bob", None)


def test_person_is_strict():
    with pytest.raises(ValidationError):
        PersonDTO.model_validate({"id": "1", "name": "Alice", "age": 30})
