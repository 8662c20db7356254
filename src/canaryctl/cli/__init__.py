"""canaryctl command line interface."""
