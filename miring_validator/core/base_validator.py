from abc import ABC, abstractmethod
from typing import List, Union
from ..models import Diagnostic

class BaseValidator(ABC):
    """Abstract base class for the MIRING validation passes"""

    def __init__(self):
        self.pass_name = None  # To be set by subclasses

    @abstractmethod
    def validate(self, xml: Union[str, bytes]) -> List[Diagnostic]:
        """Validate one HML document and return its diagnostics"""
        pass
