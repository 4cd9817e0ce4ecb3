# firewall_api/__init__.py
"""
Keep this file minimal so 'firewall_api' is always a proper package.

Do NOT import submodules here (e.g., don't import main).
Tests and runtime should import from 'firewall_api.main' directly:
    from firewall_api.main import create_app
And Uvicorn should use:
    uvicorn firewall_api.main:create_app --factory
"""
