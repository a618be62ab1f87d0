"""Learning-management backend: course catalog, lesson progress and certificates."""
