"""
Static asset table.

Built once at startup from the manifest written by the asset build step and
handed to the dispatcher. Lookups are exact matches on the content-addressed
filename.
"""

import functools
import json
import mimetypes
import os
from types import MappingProxyType
from typing import Callable, Iterable, List, Mapping

from .resources import StaticAsset, StaticAssetResource

AssetTable = Mapping[str, Callable[[], StaticAssetResource]]

EMPTY_ASSET_TABLE: AssetTable = MappingProxyType({})


def build_asset_table(assets: Iterable[StaticAsset]) -> AssetTable:
    table = {}
    for asset in assets:
        if asset.filename in table:
            raise ValueError(f"Duplicate asset filename: {asset.filename}")
        table[asset.filename] = functools.partial(StaticAssetResource, asset)
    return MappingProxyType(table)


def load_asset_manifest(manifest_path: str) -> List[StaticAsset]:
    """
    Read an asset manifest.

    Shape:
    {
        "assets": [
            {"name": "style.css", "path": "style.css",
             "checksum": "<url-safe digest>", "mime": "text/css"}
        ]
    }

    Relative paths resolve against the manifest's directory. `checksum` and
    `mime` are optional.
    """
    with open(manifest_path, encoding="utf-8") as fh:
        data = json.load(fh)

    base_dir = os.path.dirname(os.path.abspath(manifest_path))
    assets = []

    for entry in data.get("assets", []):
        try:
            name = entry["name"]
        except (KeyError, TypeError):
            raise ValueError(f"Invalid asset manifest entry: {entry!r}")

        path = os.path.join(base_dir, entry.get("path", name))
        mime = entry.get("mime") or mimetypes.guess_type(name)[0] or "application/octet-stream"

        assets.append(
            StaticAsset(
                name=name,
                path=path,
                mime=mime,
                checksum=entry.get("checksum"),
            )
        )

    return assets
