"""Force deletion of CloudFormation stacks stuck in DELETE_FAILED."""

__version__ = "0.1.0"
