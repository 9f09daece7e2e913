"""Pure state transitions: pane layout state machine and selection model."""
