"""Match discovery, navigation and highlighting."""
