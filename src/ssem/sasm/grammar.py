''' Token grammar for SSEM program lines '''

import pyparsing as pp

import ssem.common.hwconf as hw


def exact(expr: pp.ParserElement) -> pp.ParserElement:
    # Tokens are cut on literal separators only, so no whitespace is skipped
    return (expr + pp.StringEnd()).leave_whitespace()


us_dec_const = pp.Regex('[0-9]+').set_parse_action(lambda r: int(r[0]))
s_dec_const = pp.Regex('[+-]?[0-9]+').set_parse_action(lambda r: int(r[0]))
bin_word = pp.Regex(f'[01]{{{hw.WORD_BITS}}}').set_parse_action(lambda r: int(r[0], 2))

address = exact(us_dec_const)
operand = exact(s_dec_const)
word = exact(bin_word)


def parse_token(expr: pp.ParserElement, text: str) -> int:
    ''' Raises pp.ParseException unless text is exactly one token of expr '''
    return expr.parse_string(text)[0]
