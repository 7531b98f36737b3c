"""
Meter API Grader: Automated validation of measurement API submissions

Clones a student repository, brings it up with Docker Compose, waits for the
containers to report healthy and runs the black-box HTTP test suite against it.
"""

__version__ = "0.1.0"
