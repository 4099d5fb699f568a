"""Find likely unused or oversized dependencies in Gradle build scripts."""

__version__ = "0.1.0"
