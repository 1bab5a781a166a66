from .report_generator import generate_report
from .batch_report import BatchReporter


__all__ = ['generate_report', 'BatchReporter']
