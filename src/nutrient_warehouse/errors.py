"""Error taxonomy for the pipeline.

Every error is fatal: it surfaces to the command line and ends the run.
"""


class PipelineError(Exception):
    """Base class for pipeline failures."""


class DecodingError(PipelineError):
    """A CSV row could not be decoded into its record kind."""


class SchemaError(PipelineError):
    """Table creation or an insert did not match the catalog."""


class ConsistencyError(PipelineError):
    """The nutrient pivots do not cover the food id universe."""


class SnapshotError(PipelineError):
    """The durable copy of the working store failed."""


class StoreError(PipelineError):
    """The relational store rejected a statement."""
