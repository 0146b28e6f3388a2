"""
Run the MongoDB geospatial queries exercise.

Connects to $MONGODB_URI (default mongodb://localhost:27017/mongodb-geospatial-queries),
reseeds the "test" collection with the sample GeoJSON documents, then prints
polygon areas, the object closest to pedestrian2 and the objects within building2.
"""
import os
import sys

# Add parent directory to path to import geoquery
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from geoquery.cli import main

if __name__ == "__main__":
    sys.exit(main())
