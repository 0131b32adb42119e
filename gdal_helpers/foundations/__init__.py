"""Foundation types with no GDAL dependency."""
