"""BuildRun identity stored in a CustomRun ``status.extraFields`` payload.

When a CustomRun stands in for a single triggered build, the BuildRun created
for it is recorded in the CustomRun status instead of a label, so the next
reconciliation pass finds the existing BuildRun::

    encode_extra_fields(custom_run, ExtraFields.from_build_run(build_run))
    ...
    try:
        extra_fields = decode_extra_fields(custom_run)
    except ExtraFieldsNotPopulatedError:
        ...  # no BuildRun yet, issue one
"""

from __future__ import annotations

from pydantic import ConfigDict
from pydantic import ValidationError as PydanticValidationError

from pipetrigger.kernel.domain.build_run import BuildRun
from pipetrigger.kernel.domain.custom_run import CustomRun
from pipetrigger.kernel.domain.meta import NamespacedName, ResourceModel
from pipetrigger.kernel.exceptions import ExtraFieldsDecodeError, ExtraFieldsNotPopulatedError


class ExtraFields(ResourceModel):
    """Namespaced name of the BuildRun issued for a CustomRun."""

    model_config = ConfigDict(extra="forbid", strict=True)

    build_run_namespace: str = ""
    build_run_name: str = ""

    @classmethod
    def from_build_run(cls, build_run: BuildRun) -> ExtraFields:
        return cls(
            build_run_namespace=build_run.metadata.namespace,
            build_run_name=build_run.metadata.name,
        )

    def is_empty(self) -> bool:
        return self.build_run_namespace == "" and self.build_run_name == ""

    @property
    def namespaced_name(self) -> NamespacedName:
        return NamespacedName(self.build_run_namespace, self.build_run_name)


def encode_extra_fields(custom_run: CustomRun, extra_fields: ExtraFields) -> None:
    """Store ``extra_fields`` as the CustomRun's ``status.extraFields`` JSON object."""
    custom_run.status.extra_fields = extra_fields.model_dump(by_alias=True)


def decode_extra_fields(custom_run: CustomRun) -> ExtraFields:
    """Decode the BuildRun identity recorded on the CustomRun.

    Raises
    ------
    ExtraFieldsNotPopulatedError
        When the payload is absent, has zero size, or holds an empty record
    ExtraFieldsDecodeError
        When the payload is present but does not decode into ExtraFields
    """
    namespaced_name = custom_run.namespaced_name
    payload = custom_run.status.extra_fields

    if custom_run.status.extra_fields_size() == 0 or payload == {}:
        raise ExtraFieldsNotPopulatedError(namespaced_name, "extraFields is not populated")

    try:
        if isinstance(payload, bytes | str):
            extra_fields = ExtraFields.model_validate_json(payload)
        else:
            extra_fields = ExtraFields.model_validate(payload)
    except PydanticValidationError as e:
        raise ExtraFieldsDecodeError(
            namespaced_name, f"unable to decode extraFields: {e.error_count()} error(s)"
        ) from e

    if extra_fields.is_empty():
        raise ExtraFieldsNotPopulatedError(namespaced_name, "extraFields attributes are empty")
    return extra_fields
