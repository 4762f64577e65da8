"""Reserved keys and API versions the triggers core writes and matches on.

Every label and annotation the core writes lives under a single prefix. The
keys are carried in an immutable :class:`ReservedKeys` value instead of
module globals, so a deployment can change the prefix without touching call
sites::

    keys = ReservedKeys.from_prefix("triggers.example.com")
    keys.build_runs_created  # "triggers.example.com/buildrun-names"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

DEFAULT_PREFIX = "triggers.shipwright.io"

SHIPWRIGHT_API_VERSION = "shipwright.io/v1alpha1"
TEKTON_API_V1ALPHA1 = "tekton.dev/v1alpha1"
TEKTON_API_V1BETA1 = "tekton.dev/v1beta1"

RUN_KIND = "Run"
CUSTOM_RUN_KIND = "CustomRun"

# Tekton's default pipeline timeout when neither spec.timeouts nor spec.timeout is set
DEFAULT_PIPELINE_TIMEOUT = timedelta(minutes=60)


@dataclass(frozen=True, slots=True)
class ReservedKeys:
    """Reserved prefix, the keys derived from it, and the API versions to match.

    Attributes
    ----------
    prefix:
        Namespace for every label/annotation written by this package. Labels
        under it never reach a build selector.
    build_api_version:
        API version of the build resources. A pipeline task referencing it is
        a custom task handled elsewhere.
    run_api_version:
        API version of the Tekton ``Run`` kind owning BuildRuns.
    custom_run_api_version:
        API version of the Tekton ``CustomRun`` kind owning BuildRuns.
    """

    prefix: str = DEFAULT_PREFIX
    build_api_version: str = SHIPWRIGHT_API_VERSION
    run_api_version: str = TEKTON_API_V1ALPHA1
    custom_run_api_version: str = TEKTON_API_V1BETA1
    owned_by_run: str = field(init=False)
    owned_by_pipeline_run: str = field(init=False)
    build_runs_created: str = field(init=False)
    pipeline_run_name: str = field(init=False)
    pipeline_run_triggered_builds: str = field(init=False)

    def __post_init__(self) -> None:
        # frozen dataclass, derived keys are set through object.__setattr__
        object.__setattr__(self, "owned_by_run", f"{self.prefix}/owned-by-run")
        object.__setattr__(self, "owned_by_pipeline_run", f"{self.prefix}/owned-by-pipelinerun")
        object.__setattr__(self, "build_runs_created", f"{self.prefix}/buildrun-names")
        object.__setattr__(self, "pipeline_run_name", f"{self.prefix}/pipelinerun-name")
        object.__setattr__(
            self,
            "pipeline_run_triggered_builds",
            f"{self.prefix}/pipelinerun-triggered-builds",
        )

    @classmethod
    def from_prefix(cls, prefix: str) -> ReservedKeys:
        return cls(prefix=prefix)

    def is_reserved(self, key: str) -> bool:
        """Whether ``key`` belongs to the reserved namespace."""
        return key.startswith(self.prefix)


DEFAULT_KEYS = ReservedKeys()
