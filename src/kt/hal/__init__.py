"""\
HAL+JSON support library.

"""
