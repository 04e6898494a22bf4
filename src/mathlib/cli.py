"""
bc-mathlib CLI — вычисление функций из командной строки

Usage:
    bc-mathlib eval FUNCTION ARG [ARG] [--scale N] [--ibase B] [--rounding MODE]
    bc-mathlib batch [--input PATH]
    python -m src.mathlib ...

FUNCTION: sine, cosine, arctangent, natural_log, exponential, bessel_j
          (или имена bc: s, c, a, l, e, j)

Exit codes:
    0: Успешное вычисление
    1: Ошибка вычисления / движка / контракта
    2: Ошибка использования (argparse)
"""

import argparse
import json
import logging
import sys
from typing import Any

from jsonschema import ValidationError as ContractViolation
from pydantic import ValidationError

from src.core.domain import (
    DECIMAL_BASE,
    DEFAULT_SCALE,
    EvaluationRequest,
    RoundingMode,
)
from src.core.engine import CalculatorCoreError
from src.core.math import SeriesDivergenceError
from src.mathlib.evaluator import evaluate, evaluate_batch, resolve_function

logger = logging.getLogger(__name__)

# Ошибки, завершающие вычисление с кодом 1
EVALUATION_ERRORS = (
    CalculatorCoreError,
    SeriesDivergenceError,
    ContractViolation,
    ValidationError,
    ValueError,
)


def _output_json(data: Any) -> None:
    """Вывод JSON в stdout с детерминированным порядком ключей."""
    print(json.dumps(data, sort_keys=True, indent=2))


def _load_json_input(input_path: str | None) -> Any:
    """
    Загрузка JSON из файла или stdin.

    Raises:
        OSError: Файл недоступен
        json.JSONDecodeError: Невалидный JSON
    """
    if input_path:
        with open(input_path, encoding="utf-8") as f:
            return json.load(f)
    return json.load(sys.stdin)


def cmd_eval(args: argparse.Namespace) -> int:
    """Вычисление одной функции; печатает значение."""
    request = EvaluationRequest(
        function=resolve_function(args.function),
        arguments=args.arguments,
        scale=args.scale,
        ibase=args.ibase,
        rounding=RoundingMode[args.rounding],
    )
    result = evaluate(request)
    print(result.value)
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    """Вычисление JSON-массива запросов; печатает JSON-массив результатов."""
    payload = _load_json_input(args.input)
    if not isinstance(payload, list):
        raise ValueError("Batch input must be a JSON array of requests")
    _output_json(evaluate_batch(payload))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Создание парсера аргументов."""
    parser = argparse.ArgumentParser(
        prog="bc-mathlib",
        description="Arbitrary-precision transcendental functions (bc -l library)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="DEBUG logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    eval_parser = subparsers.add_parser("eval", help="Evaluate one function")
    eval_parser.add_argument("function", help="Function name (long or bc alias)")
    eval_parser.add_argument("arguments", nargs="+", help="Arguments as literals in --ibase")
    eval_parser.add_argument("--scale", type=int, default=DEFAULT_SCALE, help="Fractional digits")
    eval_parser.add_argument("--ibase", type=int, default=DECIMAL_BASE, help="Base of arguments")
    eval_parser.add_argument(
        "--rounding",
        choices=[mode.name for mode in RoundingMode],
        default=RoundingMode.TRUNCATE.name,
        help="Rounding to scale",
    )

    batch_parser = subparsers.add_parser("batch", help="Evaluate a JSON array of requests")
    batch_parser.add_argument(
        "--input",
        required=False,
        default=None,
        metavar="PATH",
        help="Path to JSON file (reads from stdin if omitted)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Точка входа CLI.

    Args:
        argv: Аргументы командной строки (default: sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "eval":
            return cmd_eval(args)
        if args.command == "batch":
            return cmd_batch(args)
        return 0

    except (OSError, json.JSONDecodeError) as e:
        logger.error("cannot read input: %s", e)
        return 1
    except EVALUATION_ERRORS as e:
        logger.error("evaluation failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
