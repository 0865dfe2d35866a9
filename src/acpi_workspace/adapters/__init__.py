"""Front ends that drive the workspace engine."""
