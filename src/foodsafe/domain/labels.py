"""Models for food label data."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LabelExtraction(BaseModel):
    """Product and nutrition data read from a food package."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    product_name: str = Field(min_length=1)
    ingredients: list[str] = Field(default_factory=list)
    label_text: str | None = None
    serving_size_g: float | None = Field(default=None, ge=0)
    calories: float = Field(ge=0)
    fat_g: float = Field(ge=0)
    sugar_g: float = Field(ge=0)
    sodium_mg: float = Field(ge=0)

    @field_validator("ingredients", mode="before")
    @classmethod
    def _split_ingredients(cls, value: object) -> object:
        """Accept the comma separated form typed into the label form."""
        if isinstance(value, str):
            return [chunk.strip() for chunk in value.split(",") if chunk.strip()]
        return value

    @field_validator("ingredients")
    @classmethod
    def _drop_blank_ingredients(cls, value: list[str]) -> list[str]:
        return [item for item in value if item]

    @field_validator("label_text")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None

    @property
    def ingredients_text(self) -> str:
        """Return ingredients joined the way they appear on a label."""
        return ", ".join(self.ingredients)
