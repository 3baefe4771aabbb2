"""
Test suite for mpfloat

Contains:
- test_operands.py  : operand classification and integer range checks
- test_context.py   : process-wide defaults and their resolvers
- test_dispatch.py  : primitive selection by operand shape
- test_textconv.py  : rendering, parsing and numeric coercion
- test_handle.py    : handle lifecycle, precision accessors, operators
"""
