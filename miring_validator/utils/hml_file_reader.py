"""
HML File Reader Utility.

HML files are read as raw bytes: the parser then decodes each document
according to its own XML declaration (UTF-8, ISO-8859-1, UTF-16, ...).
"""

from pathlib import Path
from typing import Any, Dict, Union


class HmlFileReader:
    """
    Read HML files for validation.

    Reading never raises; failures are reported in the returned dictionary
    so a batch run can record them as fatal diagnostics and continue with
    the next file.
    """

    @staticmethod
    def read_file(file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read an HML file.

        Args:
            file_path: Path to the HML file

        Returns:
            Dictionary with keys:
                - success: Boolean indicating if read was successful
                - content: Raw document bytes (if successful)
                - error_type: file_not_found, not_a_file, permission_error,
                  empty_file or read_error (if unsuccessful)
                - message: Error message (if unsuccessful)
                - file_path: Original file path
        """
        path = Path(file_path)
        file_path = str(file_path)

        if not path.exists():
            return HmlFileReader._failure(file_path, 'file_not_found', f"File not found: {file_path}")
        if not path.is_file():
            return HmlFileReader._failure(file_path, 'not_a_file', f"Not a regular file: {file_path}")

        try:
            content = path.read_bytes()
        except PermissionError:
            return HmlFileReader._failure(file_path, 'permission_error', f"Permission denied: {file_path}")
        except OSError as e:
            return HmlFileReader._failure(file_path, 'read_error', f"Unexpected error reading file: {e}")

        if not content.strip():
            return HmlFileReader._failure(file_path, 'empty_file', f"File is empty: {file_path}")

        return {
            'success': True,
            'content': content,
            'file_path': file_path
        }

    @staticmethod
    def _failure(file_path: str, error_type: str, message: str) -> Dict[str, Any]:
        return {
            'success': False,
            'error_type': error_type,
            'message': message,
            'file_path': file_path
        }
