from pydantic import AliasChoices, BaseModel, ConfigDict, Field


EXAMPLE = {
    "id": "tt80000",
    "title": "Titanes del Atlantico",
    "year": "2013",
    "type": "Ciencia Ficcion",
    "posterUrl": "https://demo/demoimages.png",
    "active": True,
    "description": "La humanidad se transforma en robots gigantes...",
    "location": "POPCINEMA",
}


class ListingFields(BaseModel):
    """
    Mutable listing fields. Everything is optional here: presence rules live
    in the handlers so a missing field is answered with the envelope, not a 422.
    Original column names (Title, Poster, Estado, ...) are accepted as aliases.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str | None = Field(default=None, validation_alias=AliasChoices("title", "Title"))
    year: str | None = Field(default=None, validation_alias=AliasChoices("year", "Year"))
    genre: str | None = Field(default=None, validation_alias=AliasChoices("type", "Type"))
    poster_url: str | None = Field(default=None, validation_alias=AliasChoices("posterUrl", "Poster"))
    active: bool | None = Field(default=None, validation_alias=AliasChoices("active", "Estado"))
    description: str | None = None
    location: str | None = Field(default=None, validation_alias=AliasChoices("location", "Ubication"))


class ListingCreate(ListingFields):
    model_config = ConfigDict(json_schema_extra={"example": EXAMPLE})

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "imdbID"))

    def has_key_fields(self) -> bool:
        return bool(self.id and self.title and self.year)


class ListingUpdate(ListingFields):
    model_config = ConfigDict(json_schema_extra={"example": {k: v for k, v in EXAMPLE.items() if k != "id"}})


class ListingOut(BaseModel):
    model_config = ConfigDict(json_schema_extra={"example": EXAMPLE})

    id: str
    # nullable: update does not require title/year and the existing table may allow NULL
    title: str | None
    year: str | None
    genre: str | None = Field(alias="type")
    poster_url: str | None = Field(alias="posterUrl")
    active: bool | None
    description: str | None
    location: str | None
