"""Schema RoboMonkey - render a PostgreSQL catalog into a schema snapshot."""

__version__ = "0.1.0"
