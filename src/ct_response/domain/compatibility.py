"""Startup check that the detector payload layout matches respond()'s arguments."""

from collections.abc import Sequence

from src.ct_common.errors import DeploymentConfigError

FieldLayout = Sequence[tuple[str, type]]


def check_payload_compatibility(payload_fields: FieldLayout, response_fields: FieldLayout) -> None:
    """Raise DeploymentConfigError on any difference in arity, order, name or type."""
    if len(payload_fields) != len(response_fields):
        raise DeploymentConfigError(
            f"payload has {len(payload_fields)} fields, respond() takes {len(response_fields)}"
        )
    for i, (produced, expected) in enumerate(zip(payload_fields, response_fields)):
        if tuple(produced) != tuple(expected):
            raise DeploymentConfigError(
                f"field {i}: payload carries {produced[0]}:{produced[1].__name__}, "
                f"respond() expects {expected[0]}:{expected[1].__name__}"
            )
