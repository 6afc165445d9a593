"""Main JSON Exploder implementation."""

import contextlib
import logging
from pathlib import Path
from typing import Any, List, Optional
from .constants import LARGE_ROWSET_WARNING, DEEP_NESTING_WARNING
from .engine import ExplodeEngine
from .error_handler import ErrorHandler
from .io.row_writer import RowWriter
from .models import ExplodeOptions, collect_columns
from .node_classifier import NodeClassifier
from .parser import DocumentParser
from .profiler import PerformanceProfiler
from .types import (
    ExploderInterface,
    ExplodeResult,
    WriteResult,
    ExplodeError,
    RowLimitExceededError
)
from .utils.row_estimator import RowEstimator

OUTPUT_FORMATS = ("csv", "jsonl")


class JSONExploder(ExploderInterface):
    """
    Main implementation of the JSON Exploder interface.

    Parses JSON documents, explodes them into flat rows and writes those
    rows to tabular files. Failures are reported through result objects
    rather than raised.
    """

    def __init__(self, options: Optional[ExplodeOptions] = None,
                 logger: Optional[logging.Logger] = None,
                 enable_profiling: bool = True):
        """
        Initialize the JSON Exploder.

        Args:
            options: Explode settings (separator, limits, missing marker)
            logger: Optional logger instance
            enable_profiling: Record performance metrics for each operation
        """
        self.options = options or ExplodeOptions()
        self.logger = logger or logging.getLogger(__name__)

        self.error_handler = ErrorHandler(self.logger)
        self.error_handler.validate_separator(self.options.separator)
        self.parser = DocumentParser(self.error_handler, self.logger)
        self.classifier = NodeClassifier(self.logger)
        self.estimator = RowEstimator(self.logger)
        self.engine = ExplodeEngine(
            separator=self.options.separator,
            root_key=self.options.root_key,
            max_depth=self.options.max_depth,
            max_rows=self.options.max_rows,
            logger=self.logger
        )
        self.row_writer = RowWriter(self.logger)
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

    def explode(self, json_string: str, lines: bool = False) -> ExplodeResult:
        """
        Explode a JSON document into flat rows.

        Args:
            json_string: JSON document, or JSON Lines text when ``lines`` is set
            lines: Treat the input as JSON Lines

        Returns:
            ExplodeResult with rows and columns
        """
        try:
            data = self.parser.parse_lines(json_string) if lines else self.parser.parse(json_string)
        except ValueError as e:
            return ExplodeResult(success=False, errors=[str(e)])

        return self._explode(data, len(json_string.encode('utf-8')))

    def explode_data(self, data: Any) -> ExplodeResult:
        """
        Explode an already parsed tree.

        Args:
            data: Mapping, sequence or scalar

        Returns:
            ExplodeResult with rows and columns
        """
        return self._explode(data, 0)

    def explode_file(
        self,
        input_path: str,
        output_path: str,
        output_format: str = "csv",
        lines: bool = False
    ) -> WriteResult:
        """
        Explode a JSON file and write the rows to a tabular file.

        Args:
            input_path: JSON or JSON Lines file to read
            output_path: File to write
            output_format: "csv" or "jsonl"
            lines: Treat the input as JSON Lines

        Returns:
            WriteResult with operation details
        """
        try:
            if output_format not in OUTPUT_FORMATS:
                return WriteResult(
                    success=False,
                    output_path=output_path,
                    errors=[f"Unsupported output format: {output_format}"]
                )

            path_validation = self.error_handler.validate_output_path(output_path)
            if not path_validation.is_valid:
                return WriteResult(
                    success=False,
                    output_path=output_path,
                    errors=[error.message for error in path_validation.errors]
                )
            for warning in path_validation.warnings:
                self.logger.warning(warning)

            self.logger.info(f"Starting explode: {input_path} -> {output_path} ({output_format})")

            try:
                data = self.parser.parse_file(input_path, lines=lines)
            except ValueError as e:
                return WriteResult(success=False, output_path=output_path, errors=[str(e)])

            result = self._explode(data, Path(input_path).stat().st_size)
            if not result.success:
                return WriteResult(success=False, output_path=output_path, errors=result.errors)

            try:
                if output_format == "csv":
                    write_info = self.row_writer.write_csv(result.rows, output_path, self.options.missing_value)
                else:
                    write_info = self.row_writer.write_jsonl(result.rows, output_path)
            except ExplodeError as e:
                response = self.error_handler.handle_processing_error(e)
                return WriteResult(
                    success=False,
                    output_path=output_path,
                    errors=[str(e), response.suggested_action]
                )

            return WriteResult(
                success=True,
                output_path=write_info["path"],
                row_count=write_info["row_count"],
                column_count=len(write_info["columns"])
            )

        except Exception as e:
            self.logger.error(f"Unexpected error in explode_file: {e}")
            return WriteResult(
                success=False,
                output_path=output_path,
                errors=[f"Unexpected error: {str(e)}"]
            )

    def _explode(self, data: Any, input_size: int) -> ExplodeResult:
        warnings: List[str] = []

        try:
            depth = self.classifier.calculate_depth(data)
            estimated_rows = self.estimator.estimate_rows(data) if depth <= self.options.max_depth else None
        except RecursionError:
            # Too deep to measure; the engine reports it as a depth error
            depth = None
            estimated_rows = None

        if depth is not None and depth > DEEP_NESTING_WARNING:
            warnings.append(f"Deep nesting detected (depth: {depth}).")

        try:
            if estimated_rows is not None:
                self.logger.info(f"Exploding {self.classifier.classify(data).value} root: "
                                 f"depth={depth}, estimated rows={estimated_rows}")

                if self.options.max_rows is not None and estimated_rows > self.options.max_rows:
                    raise RowLimitExceededError(self.options.max_rows, estimated_rows, "")
                if estimated_rows > LARGE_ROWSET_WARNING:
                    warnings.append(f"Large output detected ({estimated_rows} rows). "
                                    "Sibling lists are being combined by cross-product.")

            with self._profile("explode", input_size) as profiler:
                rows = self.engine.flatten(data)
                columns = collect_columns(rows)
                if profiler:
                    profiler.record_output(len(rows), len(columns))

        except ExplodeError as e:
            response = self.error_handler.handle_processing_error(e)
            return ExplodeResult(
                success=False,
                errors=[str(e), response.suggested_action],
                warnings=warnings or None
            )

        for warning in warnings:
            self.logger.warning(warning)

        return ExplodeResult(
            success=True,
            rows=rows,
            columns=columns,
            row_count=len(rows),
            warnings=warnings or None
        )

    def _profile(self, operation_name: str, input_size: int):
        if self.profiler is None:
            return contextlib.nullcontext()
        return self.profiler.profile_operation(operation_name, input_size)
