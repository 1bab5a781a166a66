"""
Validator Message Parser Utility.

Marker based field extraction from schema engine messages. Both Xerces style
("cvc-complex-type.4: Attribute 'a' must appear on element 'n'.") and libxml2
style ("Element '{ns}n': The attribute 'a' is required but missing.") messages
are handled. Every helper returns None instead of raising when its markers are
absent, so callers can fall back to an unclassified diagnostic.
"""

from typing import Dict, List, Optional


class MessageParser:
    """Extract element and attribute names from loosely structured messages"""

    CONTENT_MODEL_CODE_PREFIX = 'cvc-complex-type.2.4.'

    @staticmethod
    def tokenize(message: str) -> List[str]:
        """Split a message on whitespace"""
        return message.split()

    @staticmethod
    def error_code(message: str) -> str:
        """
        Return the leading validator error code, e.g. 'cvc-complex-type.2.4.a'.

        Returns an empty string when the first token is not a code.
        """
        tokens = MessageParser.tokenize(message)
        if tokens and tokens[0].endswith(':') and tokens[0].startswith('cvc-'):
            return tokens[0][:-1]
        return ""

    @staticmethod
    def quoted_values(message: str, quote: str = "'") -> List[str]:
        """
        Return all values enclosed in pairs of quote characters, in order.

        An unpaired trailing quote is ignored.
        """
        values = []
        start = message.find(quote)
        while start != -1:
            end = message.find(quote, start + 1)
            if end == -1:
                break
            values.append(message[start + 1:end])
            start = message.find(quote, end + 1)
        return values

    @staticmethod
    def local_name(qualified_name: str) -> str:
        """
        Strip namespace decoration from a node name.

        Handles Clark notation ('{uri}name'), Xerces notation ('"uri":name')
        and surrounding quotes or whitespace.
        """
        name = qualified_name.strip().strip("'").strip()
        if '":' in name:
            name = name.rsplit('":', 1)[1]
        elif name.startswith('{') and '}' in name:
            name = name[name.index('}') + 1:]
        return name.strip().strip('"').strip()

    @staticmethod
    def last_candidate(message: str, open_marker: str, close_marker: str) -> Optional[str]:
        """
        Return the last name of the delimited candidate set in the message.

        The set spans from the first open_marker to the last close_marker and
        is comma separated. Truncation markers ('...') are skipped.
        """
        start = message.find(open_marker)
        end = message.rfind(close_marker)
        if start == -1 or end == -1 or end <= start:
            return None

        candidates = [
            MessageParser.local_name(candidate)
            for candidate in message[start + len(open_marker):end].split(',')
        ]
        candidates = [c for c in candidates if c and c != '...']
        if not candidates:
            return None
        return candidates[-1]

    @staticmethod
    def expected_child(message: str) -> Optional[str]:
        """
        Return the expected element name appearing last in a content model message.

        Xerces lists the candidates as '{"uri":a, "uri":b}' after "One of"
        in cvc-complex-type.2.4.* messages, libxml2 as '( {uri}a, {uri}b )'
        after "Expected is". Any other message yields None; element names
        in Clark notation ('{uri}name') are never read as a candidate set.
        """
        libxml2_marker = "Expected is"
        if libxml2_marker in message:
            tail = message[message.index(libxml2_marker):]
            return MessageParser.last_candidate(tail, "(", ")")

        if MessageParser.error_code(message).startswith(MessageParser.CONTENT_MODEL_CODE_PREFIX):
            xerces_marker = "One of"
            if xerces_marker not in message:
                return None
            tail = message[message.index(xerces_marker):]
            return MessageParser.last_candidate(tail, "{", "}")
        return None

    @staticmethod
    def format_attributes(node_name: str, attributes: Dict[str, str]) -> str:
        """Render the attributes of a node as readable context text"""
        if not attributes:
            return ""
        rendered = ", ".join(f"{{{name}:{value}}}" for name, value in attributes.items())
        return f"Parent node {node_name} has these attributes: {rendered}"
