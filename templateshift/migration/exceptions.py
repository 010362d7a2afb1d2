"""Error taxonomy for template migration.

Expected incompatibility (a missing required section, a dropped section) is
reported as data on the CompatibilityReport and never raised. These
exceptions cover structurally invalid inputs and request lifecycle events.
"""


class TemplateShiftError(Exception):
    """Base exception for all template migration errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AnalysisError(TemplateShiftError):
    """A template definition or content snapshot cannot be analyzed.

    Raised when a definition has neither a schema nor default content, or
    when a section value is not a key/value bag.
    """

    def __init__(self, message: str, template_id: str | None = None) -> None:
        self.template_id = template_id
        super().__init__(message)


class MigrationError(TemplateShiftError):
    """The migration transform could not produce destination content."""

    def __init__(self, message: str, section_id: str | None = None) -> None:
        self.section_id = section_id
        super().__init__(message)


class TemplateNotFoundError(TemplateShiftError):
    """A template id is unknown to the registry."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Template {template_id} not found")


class RequestSupersededError(TemplateShiftError):
    """An in-flight request was overtaken by a newer one."""

    pass


class RequestCancelledError(TemplateShiftError):
    """An in-flight request was cancelled by its caller."""

    pass
