"""Static descriptors of the regulation and the API itself."""

from typing import Any, Dict

from ehds_gateway.core.resources import RESOURCES

API_VERSION = "1.0"
OUTPUT_FORMATS = ("json", "csv")

REGULATION = {
    "title": "Regulation (EU) 2025/327 - European Health Data Space",
    "shortTitle": "EHDS Regulation",
    "celex": "32025R0327",
    "eli": "http://data.europa.eu/eli/reg/2025/327",
    "eurLex": "https://eur-lex.europa.eu/legal-content/EN/TXT/?uri=CELEX:32025R0327",
    "datePublished": "2025-01-22",
    "inForce": True,
}

PUBLISHER = {
    "@type": "Organization",
    "name": "EHDS Explorer",
    "url": "https://ehdsexplorer.eu",
}

IS_PART_OF = {
    "@type": "Legislation",
    "name": "Regulation (EU) 2025/327",
    "identifier": "CELEX:32025R0327",
}

DATASET_LICENSE = "https://opensource.org/licenses/MIT"
SOURCE_REPOSITORY = "https://github.com/stefanbuttigieg/ehdsexplorer"


def build_metadata() -> Dict[str, Any]:
    """Hand-authored descriptor returned for the metadata resource."""
    return {
        "regulation": dict(REGULATION),
        "api": {
            "version": API_VERSION,
            "endpoints": [
                {"resource": d.name, "description": d.description}
                for d in RESOURCES.values()
                if not d.is_static
            ],
            "formats": list(OUTPUT_FORMATS),
        },
        "license": "MIT",
        "source": SOURCE_REPOSITORY,
    }
