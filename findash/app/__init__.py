"""Application composition: settings, session scope, and the dashboard controller."""
