"""
Typed GeoJSON objects, with a strict codec and a Shapely bridge.

```python
from geojson_codec import loads, dumps, to_shapely

feature = loads('{"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]}}')
point = to_shapely(feature.geometry)
text = dumps(feature)
```

References:
    - https://tools.ietf.org/html/rfc7946
"""

import importlib.metadata
import logging


__version__: str = importlib.metadata.version("geojson-codec")

# we add this to all modules for pdoc;
# see https://pdoc.dev/docs/pdoc.html#use-numpydoc-or-google-docstrings
__docformat__ = "google"

# we also use __all__ in all modules for pdoc; this lets us control the order
__all__ = (
    "__version__",
    "Feature",
    "FeatureCollection",
    "GeoJson",
    "GeoJsonError",
    "Geometry",
    "from_value",
    "to_value",
    "loads",
    "dumps",
    "to_shapely",
    "from_shapely",
    "close_rings",
    "codec",
    "conversion",
    "crs",
    "error",
    "feature",
    "geometry",
    "repair",
    "spatial",
    "value",
)

from .codec import dumps, from_value, loads, to_value
from .conversion import from_shapely, to_shapely
from .error import GeoJsonError
from .feature import Feature, FeatureCollection, GeoJson
from .geometry import Geometry
from .repair import close_rings


logging.getLogger(__name__).addHandler(logging.NullHandler())
