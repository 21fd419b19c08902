"""
Cloud Port

Architectural Intent:
- Port interface for the CPI method surface the director depends on
- Implemented by ExternalCpi, which forwards each call to a CPI executable

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- Calls are synchronous: each one blocks until the CPI answers
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class CloudPort(Protocol):
    """Port for CPI infrastructure operations."""

    def current_vm_id(self) -> Any:
        ...

    def create_stemcell(self, image_path: str, cloud_properties: dict) -> Any:
        ...

    def delete_stemcell(self, stemcell_cid: str) -> Any:
        ...

    def create_vm(
        self,
        agent_id: str,
        stemcell_cid: str,
        cloud_properties: dict,
        network_settings: dict,
        disk_cids: Optional[list],
        environment: Optional[dict],
    ) -> Any:
        ...

    def delete_vm(self, vm_cid: str) -> Any:
        ...

    def has_vm(self, vm_cid: str) -> Any:
        ...

    def reboot_vm(self, vm_cid: str) -> Any:
        ...

    def set_vm_metadata(self, vm_cid: str, metadata: dict) -> Any:
        ...

    def configure_networks(self, vm_cid: str, networks: dict) -> Any:
        ...

    def create_disk(self, size: int, vm_cid: Optional[str]) -> Any:
        ...

    def delete_disk(self, disk_cid: str) -> Any:
        ...

    def attach_disk(self, vm_cid: str, disk_cid: str) -> Any:
        ...

    def detach_disk(self, vm_cid: str, disk_cid: str) -> Any:
        ...

    def snapshot_disk(self, disk_cid: str) -> Any:
        ...

    def delete_snapshot(self, snapshot_cid: str) -> Any:
        ...

    def get_disks(self, vm_cid: str) -> Any:
        ...

    def ping(self) -> Any:
        ...
