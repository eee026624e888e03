"""
Dashboard application services.

- DashboardController: state and operations of one mounted dashboard
- ProjectSync: loading, writing and subscribing through the document store
"""
