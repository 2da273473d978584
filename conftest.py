"""
Root conftest: makes the omf_dumper_py package importable when the test
suite runs from a source checkout.
"""
