# bundle.py
# Lays a spec out as an OCI bundle on disk:
#   <bundle>/config.json
#   <bundle>/rootfs/
# Starting the container from it is runc's business, not ours.
from __future__ import annotations

from pathlib import Path
from typing import Optional

from .spec import Spec
from .specbuilder import ROOTFS_DIR


CONFIG_FILENAME = "config.json"


def write_bundle(spec: Spec, bundle_dir: Optional[str | Path] = None) -> Path:
    """
    Write spec into a bundle directory and return the config.json path.

    bundle_dir defaults to the parent of spec.root.path, which is where runc
    will look for the rootfs the spec names.
    """
    bundle = Path(bundle_dir) if bundle_dir is not None else Path(spec.root.path).parent
    (bundle / ROOTFS_DIR).mkdir(parents=True, exist_ok=True)

    config = bundle / CONFIG_FILENAME
    tmp = config.with_suffix(".json.tmp")
    try:
        # write to tmp, then atomic rename so runc never sees half a file
        tmp.write_text(spec.to_json(), encoding="utf-8")
        tmp.replace(config)
    finally:
        tmp.unlink(missing_ok=True)

    return config
