"""Reading services: tokenization, assembly, document loading and playback."""

from rsvp_reader.services.tokenizer import DocumentTokenizer, TokenizerResult, tokenize
from rsvp_reader.services.assembler import assemble
from rsvp_reader.services.parser import load_document, parse_file, parse_text
from rsvp_reader.services.playback import PlaybackLoop, PlaybackState

__all__ = [
    "DocumentTokenizer",
    "TokenizerResult",
    "tokenize",
    "assemble",
    "load_document",
    "parse_file",
    "parse_text",
    "PlaybackLoop",
    "PlaybackState",
]
