# type: ignore
''' Program source grammar '''

import pyparsing as pp


s_dec_const = pp.Regex('[+-]?[0-9]+').setParseAction(lambda r: int(r[0]))

separator = pp.Suppress(',')

program = s_dec_const + pp.ZeroOrMore(separator + s_dec_const) + pp.StringEnd()
