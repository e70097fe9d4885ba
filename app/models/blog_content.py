from typing import List

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel


class ImageRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    src: str
    alt: str = ""


class BlogContent(BaseModel):
    """Structured record extracted from a single blog page."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    title: str
    meta_description: str = ""
    content: str = ""
    headings: List[str] = []
    images: List[ImageRef] = []

    @computed_field
    @property
    def word_count(self) -> int:
        """Number of whitespace-delimited tokens in :attr:`content`."""
        return len([word for word in self.content.split() if word])
