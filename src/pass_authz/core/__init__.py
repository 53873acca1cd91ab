"""Core building blocks shared by pass-authz features."""
