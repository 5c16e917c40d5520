#!/usr/bin/env python3
"""
Live Notifier - Main entry point

This is a simple launcher that runs the live_notifier package as a module.
All application code is in the live_notifier/ directory.
"""

if __name__ == "__main__":
    import runpy

    # Run the live_notifier package as a module
    runpy.run_module("live_notifier", run_name="__main__")
