"""
Image URL construction for Sanity image assets.
"""

import re
from typing import Any, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit, parse_qsl

CDN_BASE = "https://cdn.sanity.io/images"

# image-<assetId>-<width>x<height>-<format>
ASSET_REF_PATTERN = re.compile(r'^image-(?P<asset_id>[A-Za-z0-9]+)-(?P<dims>\d+x\d+)-(?P<fmt>[a-z0-9]+)$')


def with_size(url: str, width: Optional[int] = None, height: Optional[int] = None) -> str:
    """Add (or replace) the w/h transformation parameters of an image URL."""
    if not width and not height:
        return url

    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query) if k not in ('w', 'h')]
    if width:
        query.append(('w', str(int(width))))
    if height:
        query.append(('h', str(int(height))))
    return urlunsplit(parts._replace(query=urlencode(query)))


def _asset_ref(source: Any) -> Optional[str]:
    """Find the asset reference (or a ready URL) in an image value."""
    if isinstance(source, str):
        return source
    if isinstance(source, dict):
        asset = source.get('asset', source)
        if isinstance(asset, dict):
            return asset.get('url') or asset.get('_ref') or asset.get('_id')
        if isinstance(asset, str):
            return asset
    return None


class ImageUrlBuilder:
    """Builds CDN URLs for images stored in one project/dataset."""

    def __init__(self, project_id: str, dataset: str):
        self.project_id = project_id
        self.dataset = dataset

    def url(self, source: Any, width: Optional[int] = None, height: Optional[int] = None) -> str:
        """
        Resolve an image value to a fetchable URL.

        Args:
            source: Asset reference string, image object ({"asset": {"_ref": ...}})
                    or an already resolved URL
            width: Optional display width in pixels
            height: Optional display height in pixels

        Raises:
            ValueError: if the value does not contain a usable image reference
        """
        ref = _asset_ref(source)
        if not ref:
            raise ValueError(f"Unable to resolve image from {source!r}")

        if ref.startswith(('http://', 'https://')):
            return with_size(ref, width, height)

        match = ASSET_REF_PATTERN.match(ref)
        if not match:
            raise ValueError(f"Malformed image asset reference: {ref}")

        filename = f"{match['asset_id']}-{match['dims']}.{match['fmt']}"
        url = f"{CDN_BASE}/{self.project_id}/{self.dataset}/{filename}"
        return with_size(url, width, height)
