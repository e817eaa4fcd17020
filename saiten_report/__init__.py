"""Stage 2: plain-text session reports."""
from .report_writer import write_report
