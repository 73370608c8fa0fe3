"""Report filters."""

from .report_filter import CoberturaFilter, JunitFilter, ReportFilter, build_filter

__all__ = ['CoberturaFilter', 'JunitFilter', 'ReportFilter', 'build_filter']
