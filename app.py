"""Command line entrypoint and composition root for aleph-niqqud."""

from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from typing import Sequence

from aleph_niqqud.application.bootstrap import AppServices, initialize_app_services
from aleph_niqqud.config import AppConfig, load_config
from aleph_niqqud.domain.alphabet import strip_diacritics
from aleph_niqqud.errors import NiqqudError
from aleph_niqqud.logging_config import setup_logging
from aleph_niqqud.runtime import CUDA_AVAILABLE, configure_torch_threads


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Add or strip Hebrew niqqud",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--text", type=str, default=None, help="Text to process")
    parser.add_argument(
        "--file", type=str, default=None, help="UTF-8 file with text to process"
    )
    parser.add_argument(
        "--strip",
        action="store_true",
        help="Only remove existing diacritics, do not run the model",
    )
    parser.add_argument(
        "--model-path",
        type=str,
        default=None,
        help="TorchScript model file (overrides NIQQUD_MODEL_PATH)",
    )
    parser.add_argument(
        "--max-len",
        type=int,
        default=None,
        help="Model input length (overrides NIQQUD_MAX_LEN)",
    )
    parser.add_argument("--cpu", action="store_true", help="Never run the model on CUDA")
    return parser


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    overrides = {}
    if args.model_path:
        overrides["model_path"] = os.path.abspath(args.model_path)
    if args.max_len is not None:
        overrides["max_len"] = max(2, args.max_len)
    if args.cpu:
        overrides["use_gpu"] = False
    if not overrides:
        return config
    return dataclasses.replace(config, **overrides)


def read_input(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.file:
        with open(args.file, "r", encoding="utf-8") as handle:
            return handle.read()
    return sys.stdin.read()


def build_services(config: AppConfig, logger) -> AppServices:
    configure_torch_threads(config.torch_num_threads, logger)
    return initialize_app_services(
        config=config,
        cuda_available=CUDA_AVAILABLE,
        logger=logger,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = apply_overrides(load_config(), args)
    logger = setup_logging(config)
    logger.debug(
        "Config: LOG_LEVEL=%s LOG_FILE=%s MODEL_PATH=%s REPO_ID=%s MAX_LEN=%s "
        "USE_GPU=%s FOLD_FINAL_FORMS=%s TORCH_NUM_THREADS=%s",
        config.log_level,
        config.log_file,
        config.model_path,
        config.repo_id,
        config.max_len,
        config.use_gpu,
        config.fold_final_forms,
        config.torch_num_threads,
    )
    text = read_input(args).rstrip("\n")

    if args.strip:
        print(strip_diacritics(text))
        return 0

    services = build_services(config, logger)
    try:
        result = services.api.add_niqqud(text)
    except NiqqudError as exc:
        print(f"Niqqud model error: {exc.message}", file=sys.stderr)
        return 1
    finally:
        services.controller.shutdown()
    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
