"""Models for the volumes listed in a virtual machine spec."""

from typing import Annotated

from pydantic import BaseModel, Field


class DataVolumeSource(BaseModel):
    """Reference to a DataVolume populating the volume's backing claim."""

    name: Annotated[str, Field(description="DataVolume name")]


class PersistentVolumeClaimVolumeSource(BaseModel):
    """Reference to a PersistentVolumeClaim in the virtual machine namespace."""

    claim_name: Annotated[str, Field(description="PersistentVolumeClaim name")]
    read_only: Annotated[
        bool, Field(default=False, description="Mount the claim in read-only mode")
    ]


class Volume(BaseModel):
    """Named volume of a virtual machine.

    At most one source is expected to be set. A volume with neither a DataVolume
    nor a PersistentVolumeClaim source (i.e. a container disk or a cloud-init
    source) is not backed by any claim.
    """

    name: Annotated[
        str, Field(description="Volume name, unique within a virtual machine spec")
    ]
    data_volume: Annotated[
        DataVolumeSource | None,
        Field(default=None, description="DataVolume backing the volume"),
    ]
    persistent_volume_claim: Annotated[
        PersistentVolumeClaimVolumeSource | None,
        Field(default=None, description="PersistentVolumeClaim backing the volume"),
    ]
