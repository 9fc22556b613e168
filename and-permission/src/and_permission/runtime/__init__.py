"""Runtime hosts that answer permission queries against a real platform."""
