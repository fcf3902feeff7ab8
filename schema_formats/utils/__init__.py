"""Internal helpers shared by the registry and the command line tools."""
