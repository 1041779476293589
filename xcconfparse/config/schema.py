"""Configuration schema definitions using Pydantic for validation.

Parser options are validated up front so a bad config file fails with a
clear message before any xcconfig input is read.
"""

from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator


class ParserConfig(BaseModel):
    """Options for :class:`xcconfparse.parser.driver.XcconfigParser`.

    Attributes:
        search_paths: Extra include roots tried, in order, after the
            including file's own directory.
        max_include_depth: Maximum nesting of included files.
        encoding: Text encoding used to read files from disk.
        strip_trailing_whitespace: Drop blanks at the end of each value.
        detect_include_cycles: Fail fast when a file includes itself.
    """

    search_paths: List[Path] = Field(default_factory=list)
    max_include_depth: int = Field(default=64, ge=1, le=200)
    encoding: str = "utf-8"
    strip_trailing_whitespace: bool = True
    detect_include_cycles: bool = True

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate that the encoding is known to the codecs registry."""
        import codecs

        try:
            codecs.lookup(v)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding '{v}'") from exc
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
