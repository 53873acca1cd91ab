"""Feature packages of pass-authz."""
