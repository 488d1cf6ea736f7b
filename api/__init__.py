"""
API module - the action endpoint.

A single endpoint receives an action name with a flat field set and
dispatches it to the handler of the owning module.
"""
