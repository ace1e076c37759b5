"""Exceptions raised by the document loading layer."""


class ParseError(Exception):
    """A document could not be read or converted into a parse tree."""


class EmptyDocumentError(ParseError):
    """A document was loaded successfully but produced no reading tokens."""
