from .logging_config import setup_logger
from .message_parser import MessageParser
from .hml_file_reader import HmlFileReader
from .hml_identifier import extract_hml_id, secure_parser, to_bytes


__all__ = [
    'setup_logger', 'MessageParser', 'HmlFileReader',
    'extract_hml_id', 'secure_parser', 'to_bytes',
]
