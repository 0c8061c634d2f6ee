"""
Content type classes scanned and compiled by the test suite.

- content_models: A single module with every kind of member
- catalog/: A package walked recursively by the scanner
"""
