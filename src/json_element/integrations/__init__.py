"""Integrations with third-party tooling.

- ``_pytest_plugin``: pytest fixture ``assert_json_equal``, registered through
  the ``pytest11`` entry point and discovered automatically once the package
  is installed.
"""
