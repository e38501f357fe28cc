"""HTTP layer; one subpackage per API version."""
