"""Immutable article models: documents and their prose/code body blocks"""

from datetime import datetime
from types import MappingProxyType
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProseBlock(BaseModel):
    """Markdown source for a contiguous run of non-code content."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["prose"] = "prose"
    text: str


class CodeBlock(BaseModel):
    """A verbatim code sample; rendered as-is, never executed or validated."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["code"] = "code"
    language: str = ""
    text: str


Block = Annotated[Union[ProseBlock, CodeBlock], Field(discriminator="kind")]


def freeze(value: Any) -> Any:
    """Recursively copy dicts into read-only mappings and lists into tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze: plain dicts and lists, e.g. for yaml.safe_dump."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


class Document(BaseModel):
    """A loaded article. Frozen: fields cannot be reassigned after load."""
    model_config = ConfigDict(frozen=True)

    id:         str
    title:      str
    date:       datetime                        # publish timestamp, UTC
    categories: tuple[str, ...] = ()            # authored order, de-duplicated
    blocks:     tuple[Block, ...] = ()
    path:       Optional[str] = None
    extra:      Mapping[str, Any] = Field(default_factory=dict, validate_default=True)  # unrecognized front-matter keys

    @field_validator("extra", mode="after")
    @classmethod
    def _freeze_extra(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze(value)

    def has_category(self, category: str) -> bool:
        return category in self.categories
