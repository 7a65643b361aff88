"""Quickstart: build a registry, authorize a principal, persist to disk.

Run with:  python docs/examples/quickstart.py
"""
from __future__ import annotations

import tempfile

from mp_rbac.application.persistence import create_registry
from mp_rbac.config.settings import RegistrySettings
from mp_rbac.kernel.errors import ForbiddenError
from mp_rbac.kernel.security import Permission, Principal, Role, require_permission
from mp_rbac.observability.logging import get_logger

log = get_logger("quickstart")

with tempfile.TemporaryDirectory() as storage_dir:
    settings = RegistrySettings(backend="file", storage_dir=storage_dir, log_level="INFO")
    registry, persistence = create_registry(settings)

    for pid, name in [
        ("view_dashboard", "View Dashboard"),
        ("create_posts", "Create Posts"),
        ("edit_posts", "Edit Posts"),
        ("delete_posts", "Delete Posts"),
    ]:
        registry.add_permission(Permission(pid, name))

    registry.add_role(Role("viewer", "Viewer", permission_ids={"view_dashboard"}))
    registry.add_role(
        Role("editor", "Editor", permission_ids={"view_dashboard", "create_posts", "edit_posts"})
    )

    registry.set_active_principal(Principal("u-1", "Ada", role_ids={"editor"}))
    log.info("checks", edit=registry.has_permission("edit_posts"), delete=registry.has_permission("delete_posts"))

    @require_permission(registry, "delete_posts")
    def delete_post(post_id: int) -> None:
        log.info("deleted", post_id=post_id)

    try:
        delete_post(7)
    except ForbiddenError as exc:
        log.warning("denied", reason=exc.message)

    # A second registry built from the same settings sees the saved state.
    restored, _ = create_registry(settings, setup_logging=False)
    log.info(
        "restored",
        permissions=[p.id for p in restored.list_permissions()],
        principal=restored.active_principal.id if restored.active_principal else None,
    )
