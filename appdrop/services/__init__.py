"""Services orchestrating release planning, publishing and checks."""
