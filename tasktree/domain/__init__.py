"""Domain layer: forest, drag state machine and task rules. Pure code only."""
