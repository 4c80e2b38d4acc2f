"""Taint, label and annotation keys shared with the schedulers and the executor agent."""

# Scheduler selector taint (node side) and toleration (pod side)
TAINT_SCHEDULER = "node.kube-bridge.io/scheduler"
TAINT_SCHEDULER_VALUE_FENZO = "fenzo"
TAINT_SCHEDULER_VALUE_KUBE = "kubescheduler"

# Node zone labels, current one first
NODE_LABEL_ZONE = "topology.kubernetes.io/zone"
NODE_LABEL_ZONE_LEGACY = "failure-domain.beta.kubernetes.io/zone"

TYPE_INTERNAL_IP = "InternalIP"

# Job and task domain keys
JOB_CONSTRAINT_AVAILABILITY_ZONE = "availabilityZone"
JOB_ATTRIBUTES_RUNTIME_PREDICTION_SEC = "runtimePredictionSec"
TASK_ATTRIBUTES_OPPORTUNISTIC_CPU_COUNT = "opportunisticCpuCount"
TASK_ATTRIBUTES_OPPORTUNISTIC_CPU_ALLOCATION = "opportunisticCpuAllocation"

# Pod annotations published by the executor agent
ANNOTATION_IP_ADDRESS = "IpAddress"
ANNOTATION_IS_ROUTABLE_IP = "IsRoutableIp"
ANNOTATION_ENI_IPV6_ADDRESS = "EniIPv6Address"
ANNOTATION_ENI_IP_ADDRESS = "EniIpAddress"
ANNOTATION_ENI_ID = "EniId"
ANNOTATION_RESOURCE_ID = "ResourceId"

# Pod annotations written at task launch
ANNOTATION_CONTAINER_INFO = "containerInfo"
ANNOTATION_JOB_DESCRIPTOR = "jobDescriptor"
ANNOTATION_JOB_RUNTIME_PREDICTION = "predictions.scheduler.kube-bridge.io/runtime"
ANNOTATION_OPPORTUNISTIC_CPU_COUNT = "opportunistic.scheduler.kube-bridge.io/cpu"
ANNOTATION_OPPORTUNISTIC_ID = "opportunistic.scheduler.kube-bridge.io/id"

RUNTIME_PREDICTION_UNIT = "s"

# Sentinels for missing executor and node facts
UNKNOWN_IP_ADDRESS = "UnknownIpAddress"
UNKNOWN_ENI_IP_ADDRESS = "UnknownEniIpAddress"
UNKNOWN_ENI_ID = "UnknownEniId"
UNKNOWN_RESOURCE_ID = "UnknownResourceId"

# Kubernetes caps the total size of metadata.annotations at 256 KiB
MAX_ANNOTATIONS_BYTES = 256 * 1024
