from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Union

from ..schemas import EmptyRecord, ExtractedRecord, MRZRecord, RecognizedPage, ThaiIDRecord
from .mrz import MRZParser
from .thai_id import ThaiIDParser

LOGGER = logging.getLogger(__name__)


class DocumentParser(Protocol):
    name: str

    def try_parse(self, text: str) -> Optional[Union[MRZRecord, ThaiIDRecord]]:
        ...


@dataclass(frozen=True)
class ParserMatch:
    parser: str
    source_id: str
    record: Union[MRZRecord, ThaiIDRecord]


# Priority order: any MRZ on any page beats every heuristic match.
DEFAULT_PARSERS: tuple[DocumentParser, ...] = (MRZParser(), ThaiIDParser())


class DocumentExtractor:
    def __init__(self, parsers: Sequence[DocumentParser] = DEFAULT_PARSERS) -> None:
        self.parsers = tuple(parsers)

    def find_match(self, pages: Sequence[RecognizedPage]) -> Optional[ParserMatch]:
        """Run each parser over every page in order; first hit wins."""
        for parser in self.parsers:
            for page in pages:
                record = parser.try_parse(page.text)
                if record is not None:
                    LOGGER.info("%s parser matched page %s", parser.name, page.source_id)
                    return ParserMatch(parser=parser.name, source_id=page.source_id, record=record)
        LOGGER.info("No document pattern recognized in %d page(s)", len(pages))
        return None

    def extract(self, pages: Sequence[RecognizedPage]) -> ExtractedRecord:
        match = self.find_match(pages)
        if match is None:
            return EmptyRecord()
        return match.record


def extract_document(pages: Sequence[RecognizedPage]) -> ExtractedRecord:
    return DocumentExtractor().extract(pages)
