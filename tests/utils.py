import string
from random import choices
from typing import Any

from kubernetes.client import (
    V1ObjectMeta,
    V1PersistentVolumeClaim,
    V1PersistentVolumeClaimSpec,
    V1StorageClass,
)

from virt_storage.pvc import DEFAULT_STORAGE_CLASS_ANNOTATION


def random_lower_string() -> str:
    """Return a generic random string."""
    return "".join(choices(string.ascii_lowercase, k=32))


def pvc(
    *,
    name: str | None = None,
    namespace: str | None = None,
    annotations: dict[str, str] | None = None,
    **spec: Any,
) -> V1PersistentVolumeClaim:
    """Return a PersistentVolumeClaim with the given spec attributes."""
    return V1PersistentVolumeClaim(
        metadata=V1ObjectMeta(
            name=name or random_lower_string(),
            namespace=namespace or random_lower_string(),
            annotations=annotations,
        ),
        spec=V1PersistentVolumeClaimSpec(**spec),
    )


def storage_class(
    *,
    name: str | None = None,
    is_default: bool = False,
    volume_binding_mode: str | None = None,
) -> V1StorageClass:
    """Return a StorageClass, optionally marked as the cluster default."""
    annotations = {DEFAULT_STORAGE_CLASS_ANNOTATION: "true"} if is_default else None
    return V1StorageClass(
        metadata=V1ObjectMeta(
            name=name or random_lower_string(), annotations=annotations
        ),
        provisioner=random_lower_string(),
        volume_binding_mode=volume_binding_mode,
    )
