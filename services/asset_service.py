"""
services.asset_service - Image ingestion.

The loader only decides *where* images go; this service turns the raw
cell into Image records on that target.  Cell format, one image per
association entry:

    /img/front.jpg;alt:Front view|https://cdn.example.com/back.jpg
"""

from __future__ import annotations

import logging

from db.models import Image
from loader.delimiters import split_associations, split_facets, split_name_value

logger = logging.getLogger(__name__)


class AssetService:

    def attach_images(self, target, raw_value: str) -> list[Image]:
        """Append one Image per entry to target.images; returns the new images."""
        created: list[Image] = []
        for entry in split_associations(raw_value):
            facets = split_facets(entry)
            if not facets:
                continue
            image = Image(attachment=facets[0])
            for facet in facets[1:]:
                key, val = split_name_value(facet)
                if key.lower() == "alt" and val:
                    image.alt = val
            target.images.append(image)
            created.append(image)
            logger.debug("Attached image %s to %s", image.attachment, type(target).__name__)
        return created
