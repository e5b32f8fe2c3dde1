"""Asset enumeration and resolution."""

from toastmcp.assets.registry import BUILTIN_SOUND_IDS, AssetRegistry, collect_asset_ids

__all__ = ["BUILTIN_SOUND_IDS", "AssetRegistry", "collect_asset_ids"]
