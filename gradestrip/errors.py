"""Custom exceptions used across gradestrip."""


class GradeStripError(Exception):
    """Base error for the application."""


class ConfigError(GradeStripError):
    """Configuration or mapping file error."""


class InputEmptyError(GradeStripError):
    """Raised when the source sheet has no rows at all."""


class HeaderSelectionError(GradeStripError):
    """Raised when the requested header block does not fit the source grid."""


class SourceFormatError(GradeStripError):
    """Raised for source or template files of an unsupported type."""


class TemplateError(GradeStripError):
    """Raised when a template workbook cannot be used."""
