"""
Batch normalization orchestrator
Analyzes every WAV file in a folder, then lifts all of them to the loudest peak
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from wavnorm.config import DEFAULT_CONFIG
from wavnorm.postprocess import amplitude
from wavnorm.postprocess import gain
from wavnorm.postprocess import normalize


@dataclass(frozen=True)
class NormalizeOutcome:
    source: Path
    output: Path
    gain: float
    success: bool


@dataclass
class BatchResult:
    """Summary of one batch run."""
    loudest_file: str = ''
    peak_amplitude: float = 0.0
    analyses: List[amplitude.AnalysisResult] = field(default_factory=list)
    outcomes: List[NormalizeOutcome] = field(default_factory=list)

    @property
    def written(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)


class BatchNormalizer:
    """
    Two-phase peak matcher for a folder of WAV files.

    Phase 1 measures the peak of every file. Phase 2 starts only after
    phase 1 has finished and writes a gain-adjusted copy of every file that
    is neither silent/unusable nor already at the global peak.
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize the batch normalizer.

        Args:
            config: Full configuration dictionary; the 'normalize' section is
                used. Missing keys fall back to defaults.
        """
        settings = dict(DEFAULT_CONFIG['normalize'])
        if config:
            settings.update(config.get('normalize') or {})

        self.output_prefix = settings['output_prefix']
        self.extension = settings['extension']
        self.case_sensitive = settings['case_sensitive']
        self.skip_normalized = settings['skip_normalized']
        self.strict = settings['strict_chunks']
        self.workers = max(1, int(settings['workers']))

    def _matches_extension(self, path: Path) -> bool:
        if self.case_sensitive:
            return path.suffix == self.extension
        return path.suffix.lower() == self.extension.lower()

    def scan(self, folder) -> List[Path]:
        """
        List candidate WAV files in a folder, sorted by name.

        Raises:
            FileNotFoundError: Folder does not exist
            NotADirectoryError: Path is not a folder
        """
        folder = Path(folder)
        if not folder.exists():
            raise FileNotFoundError(f"Folder not found: {folder}")
        if not folder.is_dir():
            raise NotADirectoryError(f"Not a folder: {folder}")

        paths = []
        for path in sorted(folder.iterdir(), key=lambda p: p.name):
            if not path.is_file() or not self._matches_extension(path):
                continue
            if self.skip_normalized and path.name.startswith(self.output_prefix):
                logging.debug(f"Skipping previous output: {path.name}")
                continue
            paths.append(path)
        return paths

    def _map(self, func, items):
        if self.workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                return list(pool.map(func, items))
        return [func(item) for item in items]

    def analyze(self, paths: List[Path]) -> List[amplitude.AnalysisResult]:
        """Measure the peak amplitude of every file, keeping input order."""
        logging.info(f"Analyzing {len(paths)} files...")
        return self._map(lambda p: amplitude.analyze_file(p, strict=self.strict), paths)

    @staticmethod
    def find_loudest(results: List[amplitude.AnalysisResult]) -> Tuple[str, float]:
        """
        Pick the file with the highest peak.

        The first file wins on ties. Returns ('', 0.0) if no file has a
        usable peak.
        """
        loudest_file = ''
        global_peak = 0.0
        for result in results:
            if result.usable and result.amplitude > global_peak:
                global_peak = result.amplitude
                loudest_file = result.path.name
        return loudest_file, global_peak

    def output_path(self, path: Path) -> Path:
        return path.parent / f"{self.output_prefix}{path.name}"

    def _normalize_one(self, job) -> NormalizeOutcome:
        idx, total, result, gain_factor = job
        source = result.path
        target = self.output_path(source)
        logging.info(f"[{idx}/{total}] Normalizing {source.name} -> {target.name} "
                     f"(gain: {gain_factor:.3f}, {gain.gain_to_db(gain_factor):+.2f} dB)")
        success = normalize.normalize_wav(source, target, gain_factor, strict=self.strict)
        return NormalizeOutcome(source, target, gain_factor, success)

    def normalize(self, results: List[amplitude.AnalysisResult],
                  global_peak: float) -> List[NormalizeOutcome]:
        """
        Write gain-adjusted copies of every file below the global peak.

        Files with amplitude 0 (silent or unusable) and files already at the
        global peak are left alone. A file that another target's output would
        overwrite is dropped as a source, so no job reads a file being written.
        """
        candidates = [r for r in results
                      if r.usable and r.amplitude != 0.0 and r.amplitude != global_peak]
        outputs = {self.output_path(r.path) for r in candidates}

        targets = []
        for r in candidates:
            if r.path in outputs:
                logging.warning(f"Skipping {r.path.name}: it is the output of another file in this run")
                continue
            targets.append(r)

        jobs = [(idx, len(targets), r, gain.compute_gain(global_peak, r.amplitude))
                for idx, r in enumerate(targets, 1)]
        return self._map(self._normalize_one, jobs)

    def run(self, folder) -> BatchResult:
        """
        Analyze and normalize all WAV files in a folder.

        Args:
            folder: Folder containing the WAV files

        Returns:
            BatchResult with the loudest file, its peak and per-file outcomes
        """
        logging.info(f"{'='*70}")
        logging.info(f"PEAK MATCHING: {folder}")
        logging.info(f"{'='*70}")

        paths = self.scan(folder)
        if not paths:
            logging.info(f"No {self.extension} files found")
            return BatchResult()

        # Phase 1 must complete before any gain is computed
        analyses = self.analyze(paths)
        loudest_file, global_peak = self.find_loudest(analyses)

        skipped = [r for r in analyses if not r.usable]
        if skipped:
            logging.info(f"Excluded {len(skipped)} file(s): "
                         + ", ".join(f"{r.path.name} ({r.status})" for r in skipped))

        if not loudest_file:
            logging.warning("No file with a usable peak, nothing to normalize")
            return BatchResult(analyses=analyses)

        logging.info(f"Loudest file: {loudest_file} (peak {global_peak:.6f})")

        # Phase 2
        outcomes = self.normalize(analyses, global_peak)

        result = BatchResult(loudest_file, global_peak, analyses, outcomes)
        logging.info(f"{'='*70}")
        logging.info(f"PEAK MATCHING COMPLETE: {result.written} written, {result.failed} failed")
        logging.info(f"{'='*70}")
        return result
