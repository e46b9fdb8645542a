"""
Test Fixtures - Shared Test Data and Configurations.

    - sample_config.yaml: Sample monitor configuration (camelCase keys)
"""
