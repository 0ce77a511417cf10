from pydantic import BaseModel, ConfigDict


class DTOBase(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
        strict=True,
    )


class PersonDTO(DTOBase):
    id: int
    name: str
    age: int | None = None

    def as_row(self) -> tuple:
        return (self.id, self.name, self.age)
