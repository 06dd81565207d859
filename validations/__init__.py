from .workflow_validator import OperatorNotAllowedError, UnknownRegistryTypeError, parse_and_validate_workflow

__all__ = ["OperatorNotAllowedError", "UnknownRegistryTypeError", "parse_and_validate_workflow"]
