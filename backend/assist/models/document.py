# /assist/models/document.py

from datetime import date
from enum import Enum
from typing import List
from pydantic import BaseModel, Field, model_validator

# Models for the exported application. Pure data: ExportService builds them and
# renders them to text or PDF.


class LineStyle(str, Enum):
    TITLE = "title"
    SUBTITLE = "subtitle"
    HEADING = "heading"
    DIVIDER = "divider"
    FIELD = "field"
    BODY = "body"
    FOOTER = "footer"
    BLANK = "blank"


class DocumentPage(BaseModel):
    number: int = Field(..., description="1-based page number")
    lines: List[str] = Field(default_factory=list)
    styles: List[LineStyle] = Field(default_factory=list, description="One style per line")

    @model_validator(mode="after")
    def one_style_per_line(self):
        if not self.styles:
            self.styles = [LineStyle.BODY if line else LineStyle.BLANK for line in self.lines]
        elif len(self.styles) != len(self.lines):
            raise ValueError(f"Page {self.number} has {len(self.lines)} lines but {len(self.styles)} styles")
        return self


class ApplicationDocument(BaseModel):
    title: str
    subtitle: str
    generated_on: date
    pages: List[DocumentPage] = Field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)
