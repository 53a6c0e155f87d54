"""Resolve storage provisioning details of the claims used by virtual machines.

All functions are read-only queries over objects held by an IndexedStore. They
never modify the cached objects and never keep references to them across calls.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import NamedTuple

from kubernetes.client import V1PersistentVolumeClaim, V1StorageClass

from virt_storage.exceptions import (
    MissingReferenceError,
    NotFoundError,
    StoreLookupError,
    TypeMismatchError,
)
from virt_storage.models.volume import Volume
from virt_storage.store import IndexedStore, namespaced_key

VOLUME_MODE_BLOCK = "Block"
ACCESS_MODE_READ_WRITE_MANY = "ReadWriteMany"
VOLUME_BINDING_WAIT_FOR_FIRST_CONSUMER = "WaitForFirstConsumer"

DEFAULT_STORAGE_CLASS_ANNOTATION = "storageclass.kubernetes.io/is-default-class"
PREALLOCATION_ANNOTATION_SUFFIXES = (
    "/storage.preallocation",
    "/storage.thick-provisioned",
)

logger = logging.getLogger(__name__)


class PVCLookup(NamedTuple):
    """Result of a tolerant claim lookup."""

    claim: V1PersistentVolumeClaim | None
    exists: bool
    is_block: bool


def is_pvc_block_from_store(
    store: IndexedStore, namespace: str, claim_name: str
) -> PVCLookup:
    """Look up a claim and detect whether it is backed by a block device.

    A missing claim is not an error: the returned lookup has `exists` set to False.

    Raises:
        TypeMismatchError: the cached object is not a PersistentVolumeClaim.

    """
    key = namespaced_key(namespace, claim_name)
    obj, exists = store.get_by_key(key)
    if not exists:
        logger.debug("PVC %s not found in store", key)
        return PVCLookup(None, False, False)
    if not isinstance(obj, V1PersistentVolumeClaim):
        raise TypeMismatchError(
            f"Object with key {key} is not a PersistentVolumeClaim: "
            f"object is of type {type(obj).__name__}",
            expected=V1PersistentVolumeClaim,
            actual=type(obj),
        )
    return PVCLookup(obj, True, is_pvc_block(obj))


def is_pvc_block(pvc: V1PersistentVolumeClaim) -> bool:
    """Return True if the claim explicitly requests a block volume mode.

    A claim without volume mode is never bound to a block persistent volume, so
    the claim alone answers the question.
    """
    return pvc.spec is not None and pvc.spec.volume_mode == VOLUME_MODE_BLOCK


def has_shared_access_mode(access_modes: Iterable[str] | None) -> bool:
    """Return True if the access modes allow read-write from many nodes."""
    return ACCESS_MODE_READ_WRITE_MANY in (access_modes or [])


def is_preallocated(annotations: Mapping[str, str] | None) -> bool:
    """Return True if any vendor annotation requests preallocated storage.

    Keys are matched by suffix content so that any vendor prefix is accepted, for
    example "cdi.kubevirt.io/storage.preallocation".
    """
    for key, value in (annotations or {}).items():
        if value != "true":
            continue
        if any(suffix in key for suffix in PREALLOCATION_ANNOTATION_SUFFIXES):
            return True
    return False


def pvc_name_from_virt_volume(volume: Volume) -> str:
    """Return the name of the claim backing the volume.

    An empty string means the volume is not backed by a claim.
    """
    if volume.data_volume is not None:
        # TODO: resolve the claim through the DataVolume status once claim names
        # can differ from the DataVolume name.
        return volume.data_volume.name
    if volume.persistent_volume_claim is not None:
        return volume.persistent_volume_claim.claim_name
    return ""


def virt_volumes_to_pvc_map(
    volumes: Iterable[Volume], pvc_store: IndexedStore, namespace: str
) -> dict[str, V1PersistentVolumeClaim]:
    """Map each volume name to the claim backing it.

    Volumes are processed in order and the first failure aborts the procedure.

    Raises:
        MissingReferenceError: a volume is neither a claim nor a DataVolume.
        StoreLookupError: the claim lookup failed.
        NotFoundError: the claim referenced by a volume does not exist.

    """
    volume_names_pvc_map = {}
    for volume in volumes:
        claim_name = pvc_name_from_virt_volume(volume)
        if claim_name == "":
            raise MissingReferenceError(
                f"Volume {volume.name} is not a PVC or DataVolume"
            )
        key = namespaced_key(namespace, claim_name)
        try:
            lookup = is_pvc_block_from_store(pvc_store, namespace, claim_name)
        except Exception as e:
            raise StoreLookupError(f"Failed to get PVC {key}: {e}", key=key) from e
        if not lookup.exists:
            raise NotFoundError(f"Claim {claim_name} not found")
        volume_names_pvc_map[volume.name] = lookup.claim
    return volume_names_pvc_map


def is_statically_provisioned(pvc: V1PersistentVolumeClaim) -> bool:
    """Return True if the claim explicitly opts out of any storage class."""
    return _storage_class_name(pvc) == ""


def is_dynamically_provisioned(pvc: V1PersistentVolumeClaim) -> bool:
    """Return True if the claim uses a named or the default storage class."""
    name = _storage_class_name(pvc)
    return name is None or name != ""


def get_storage_class(
    pvc: V1PersistentVolumeClaim, storage_class_store: IndexedStore
) -> V1StorageClass | None:
    """Return the StorageClass governing the claim.

    Statically provisioned claims have no StorageClass and claims without a storage
    class name use the cluster default one, if any.

    Raises:
        NotFoundError: the named StorageClass does not exist.
        TypeMismatchError: the cached object is not a StorageClass.

    """
    if is_statically_provisioned(pvc):
        return None

    name = _storage_class_name(pvc)
    if name is None:
        return _get_default_storage_class(storage_class_store)

    obj, exists = storage_class_store.get_by_key(name)
    if not exists:
        raise NotFoundError(f"StorageClass {name} does not exist")
    if not isinstance(obj, V1StorageClass):
        raise TypeMismatchError(
            f"Failed converting {name} to a StorageClass: "
            f"object is of type {type(obj).__name__}",
            expected=V1StorageClass,
            actual=type(obj),
        )
    return obj


def is_wait_for_first_consumer(
    pvc: V1PersistentVolumeClaim, storage_class_store: IndexedStore
) -> bool:
    """Return True if the claim's StorageClass delays binding to the first consumer."""
    sc = get_storage_class(pvc, storage_class_store)
    if sc is None:
        logger.debug("No StorageClass applies to PVC %s", _claim_key(pvc))
        return False
    return sc.volume_binding_mode == VOLUME_BINDING_WAIT_FOR_FIRST_CONSUMER


def _get_default_storage_class(
    storage_class_store: IndexedStore,
) -> V1StorageClass | None:
    """Return the cluster default StorageClass, None if there is none."""
    for obj in storage_class_store.list():
        if not isinstance(obj, V1StorageClass):
            raise TypeMismatchError(
                "Failed converting object to a StorageClass: "
                f"object is of type {type(obj).__name__}",
                expected=V1StorageClass,
                actual=type(obj),
            )
        annotations = (obj.metadata.annotations if obj.metadata else None) or {}
        if annotations.get(DEFAULT_STORAGE_CLASS_ANNOTATION) == "true":
            logger.debug("Default StorageClass is %s", obj.metadata.name)
            return obj
    logger.debug("No default StorageClass configured")
    return None


def _storage_class_name(pvc: V1PersistentVolumeClaim) -> str | None:
    if pvc.spec is None:
        return None
    return pvc.spec.storage_class_name


def _claim_key(pvc: V1PersistentVolumeClaim) -> str:
    if pvc.metadata is None:
        return "<unnamed>"
    return namespaced_key(pvc.metadata.namespace or "", pvc.metadata.name or "")
