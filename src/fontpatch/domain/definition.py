"""Font set definition.

A definition names a font set and maps each logical font name to the URL
its file is downloaded from. The name doubles as the cache subdirectory.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FontSetDefinition(BaseModel):
    """User-supplied font set.

    Attributes:
        name: Font set name, also the cache subdirectory name
        description: Free-form description
        spec: Definition format version
        main: Logical font name to source URL
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1)
    description: str | None = None
    spec: int | None = None
    main: dict[str, str]

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"font set name must be a plain directory name, got {value!r}")
        return value

    @property
    def entries(self) -> dict[str, str]:
        """Logical font name to source URL."""
        return self.main

    def has_font(self, logical_name: str) -> bool:
        """Check whether a logical font name is declared."""
        return logical_name in self.main
