VERSION = (0, 3, 1)
VERSION_STR = f"{VERSION[0]}.{VERSION[1]}.{VERSION[2]}{'-' +  str(VERSION[-1]) if len(VERSION) > 3 else ''}"

ARGV0 = "optkit"
DESCRIPTION = "Typed command-line option parsing with separate diagnostics for malformed input"

# Space separated tokens prepended to the command line of the optkit CLI
EXTRA_ARGS_ENV = "OPTKIT_EXTRA_ARGS"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1
