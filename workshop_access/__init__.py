"""Workshop access: permission engine for workshop tenants."""
