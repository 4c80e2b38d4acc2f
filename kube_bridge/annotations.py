"""Pod annotations written at task launch, and their decoding.

The annotation map is the only place a pod carries orchestrator facts, so the
job descriptor and opportunistic resource ids travel through it. Kubernetes
limits the total size of the map; the job descriptor is the only optional
entry and is dropped first when the budget is exceeded.
"""

import base64
import gzip
import json
import zlib
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from kube_bridge.constants import (
    ANNOTATION_CONTAINER_INFO,
    ANNOTATION_JOB_DESCRIPTOR,
    ANNOTATION_JOB_RUNTIME_PREDICTION,
    ANNOTATION_OPPORTUNISTIC_CPU_COUNT,
    ANNOTATION_OPPORTUNISTIC_ID,
    JOB_ATTRIBUTES_RUNTIME_PREDICTION_SEC,
    MAX_ANNOTATIONS_BYTES,
    RUNTIME_PREDICTION_UNIT,
    TASK_ATTRIBUTES_OPPORTUNISTIC_CPU_ALLOCATION,
    TASK_ATTRIBUTES_OPPORTUNISTIC_CPU_COUNT,
)
from kube_bridge.logging_config import get_logger
from kube_bridge.models.job import Job, JobDescriptor, Task

logger = get_logger(__name__)

PerformanceAnnotator = Callable[[Job], Mapping[str, str]]


@dataclass(frozen=True)
class EncodingResult:
    """Value-or-error outcome of a best-effort encoding step."""

    value: str | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class LaunchAnnotations:
    """Launch-time facts recovered from a pod's annotations.

    Attributes:
        container_info: Decoded container info payload
        runtime_prediction_sec: Predicted runtime in seconds, without unit
        opportunistic_cpu_count: Opportunistic CPUs allocated to the task
        opportunistic_allocation_id: Id of the opportunistic CPU allocation
        job_descriptor: Decoded job descriptor
    """

    container_info: bytes | None = None
    runtime_prediction_sec: str | None = None
    opportunistic_cpu_count: str | None = None
    opportunistic_allocation_id: str | None = None
    job_descriptor: JobDescriptor | None = None


def gzip_and_base64_encode(text: str) -> str:
    # mtime=0 keeps the output stable for identical input
    return base64.b64encode(gzip.compress(text.encode("utf-8"), mtime=0)).decode("ascii")


def gzip_and_base64_decode(value: str) -> str:
    return gzip.decompress(base64.b64decode(value, validate=True)).decode("utf-8")


def annotations_size(annotations: Mapping[str, str]) -> int:
    """Size of an annotation map as the API server accounts it (keys plus values)."""
    return sum(len(k.encode("utf-8")) + len(v.encode("utf-8")) for k, v in annotations.items())


def serialize_job_descriptor(job: Job) -> str:
    """Render the job descriptor in its canonical JSON form."""
    return json.dumps(job.descriptor.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))


def encode_job_descriptor(job: Job) -> EncodingResult:
    """Serialize, compress and base64 encode the job descriptor without raising."""
    try:
        return EncodingResult(value=gzip_and_base64_encode(serialize_job_descriptor(job)))
    except (ValueError, TypeError) as e:
        return EncodingResult(error=e)


def build_annotations(
    job: Job,
    task: Task,
    container_info: bytes,
    passthrough_attributes: Mapping[str, str],
    include_job_descriptor: bool,
    performance_annotator: PerformanceAnnotator | None = None,
    max_bytes: int = MAX_ANNOTATIONS_BYTES,
) -> dict[str, str]:
    """Build the annotation map for a task's pod.

    Args:
        job: Job the task belongs to
        task: Task being launched
        container_info: Opaque container info payload for the executor
        passthrough_attributes: Annotations copied as-is
        include_job_descriptor: Whether to attach the encoded job descriptor
        performance_annotator: Optional source of performance tool annotations
        max_bytes: Size budget of the whole annotation map

    Returns:
        The annotation map. A job descriptor that cannot be encoded, or does not
        fit the budget, is left out; everything else is always present.
    """
    annotations = dict(passthrough_attributes)
    if performance_annotator is not None:
        annotations.update(performance_annotator(job))
    annotations[ANNOTATION_CONTAINER_INFO] = base64.b64encode(container_info).decode("ascii")

    runtime_sec = job.attributes.get(JOB_ATTRIBUTES_RUNTIME_PREDICTION_SEC)
    if runtime_sec is not None:
        annotations[ANNOTATION_JOB_RUNTIME_PREDICTION] = f"{runtime_sec}{RUNTIME_PREDICTION_UNIT}"

    cpu_count = task.task_context.get(TASK_ATTRIBUTES_OPPORTUNISTIC_CPU_COUNT)
    if cpu_count is not None:
        annotations[ANNOTATION_OPPORTUNISTIC_CPU_COUNT] = cpu_count
    allocation_id = task.task_context.get(TASK_ATTRIBUTES_OPPORTUNISTIC_CPU_ALLOCATION)
    if allocation_id is not None:
        annotations[ANNOTATION_OPPORTUNISTIC_ID] = allocation_id

    if include_job_descriptor:
        result = encode_job_descriptor(job)
        if not result.ok:
            logger.error(
                f"Unable to serialize job descriptor: jobId={job.id}, error={result.error}"
            )
        else:
            size = annotations_size(annotations) + annotations_size(
                {ANNOTATION_JOB_DESCRIPTOR: result.value}
            )
            if size > max_bytes:
                logger.warning(
                    f"Job descriptor annotation omitted (size limit): "
                    f"taskId={task.id}, size={size}, limit={max_bytes}"
                )
            else:
                annotations[ANNOTATION_JOB_DESCRIPTOR] = result.value

    return annotations


def decode_container_info(value: str) -> bytes | None:
    try:
        return base64.b64decode(value, validate=True)
    except ValueError as e:
        logger.warning(f"Invalid containerInfo annotation: {e}")
        return None


def decode_job_descriptor(value: str) -> JobDescriptor | None:
    """Decode a job descriptor annotation, or None if it is corrupt."""
    try:
        return JobDescriptor.model_validate_json(gzip_and_base64_decode(value))
    except (ValueError, OSError, EOFError, zlib.error) as e:
        logger.warning(f"Invalid jobDescriptor annotation: {e}")
        return None


def decode_annotations(annotations: Mapping[str, str]) -> LaunchAnnotations:
    """Recover the launch-time facts written by build_annotations."""
    container_info = annotations.get(ANNOTATION_CONTAINER_INFO)
    if container_info is not None:
        container_info = decode_container_info(container_info)
    runtime = annotations.get(ANNOTATION_JOB_RUNTIME_PREDICTION)
    if runtime is not None and runtime.endswith(RUNTIME_PREDICTION_UNIT):
        runtime = runtime[: -len(RUNTIME_PREDICTION_UNIT)]
    descriptor = annotations.get(ANNOTATION_JOB_DESCRIPTOR)

    return LaunchAnnotations(
        container_info=container_info,
        runtime_prediction_sec=runtime,
        opportunistic_cpu_count=annotations.get(ANNOTATION_OPPORTUNISTIC_CPU_COUNT),
        opportunistic_allocation_id=annotations.get(ANNOTATION_OPPORTUNISTIC_ID),
        job_descriptor=decode_job_descriptor(descriptor) if descriptor is not None else None,
    )
