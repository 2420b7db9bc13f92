from revive.revive_config import ReviverConfig, coerce_config, dollar_tag, prefix_tag
from revive.revive_datatypes import (
    ReviveError, EvaluationError, DocumentError, DocumentParseError, DocumentEncodeError,
    Literal, Call, Deferred,
)
from revive.revive_interpreter import Reviver, normalize_args
from revive.revive_runtime import (
    make_reviver, transform, transform_curried, select_mode,
    DocumentRunner, RevivalResult, DRIVER_FED, SELF_DRIVEN,
)
from revive.revive_stdlib import StdLib, standard_functions
