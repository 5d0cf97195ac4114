import re
import string

# Characters allowed in a key
KEY_CHARS = frozenset(string.ascii_letters + string.digits + '_')

# Characters that can begin a number literal
NUMBER_START = frozenset(string.digits + '-')

# Greedy run consumed for a number literal before validation
NUMBER_CHARS = frozenset(string.digits + '.')

NUMBER_PATTERN = re.compile(r'-?[0-9]+(?:\.[0-9]+)?')

COMMENT_START = '#'
