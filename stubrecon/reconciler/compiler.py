"""
Batch compilation of exposed classes.

Coordinates, for every class a descriptor source exposes:
1. Exclusion check
2. Documentation page lookup
3. Field and method reconciliation
4. Aggregation into a CompilationResult

A failure while resolving one class never stops the batch; the class is
skipped as a whole and reported through the diagnostic observer.
"""

import asyncio
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional
import logging

from stubrecon.descriptors import DescriptorProvider
from stubrecon.diagnostics import Diagnostic, DiagnosticKind, DiagnosticObserver, log_diagnostic
from stubrecon.docs import DocumentationSource, DocumentFound, NoDocument, PageLookup, class_path_for
from stubrecon.errors import DetailParsingError, DocumentLookupError
from stubrecon.reconciler.members import MemberReconciler
from stubrecon.schemas import ClassDescriptor, CompilationResult, ReflectedClass, SkippedClass

logger = logging.getLogger(__name__)


class ExclusionList:
    """
    Names of classes to leave out of compilation.

    By default this is a pure membership test over an immutable set, which is
    what concurrent compilation needs. With ``consume=True`` every listed
    occurrence excludes exactly one class and is then used up; a name listed
    twice excludes at most two classes of that name.
    """

    def __init__(self, names: Iterable[str] = (), consume: bool = False):
        """
        Initialize the exclusion list.

        Args:
            names: Fully qualified class names, duplicates allowed
            consume: Drain one occurrence per excluded class
        """
        self.names: List[str] = [n.strip() for n in names if n.strip()]
        self.consume = consume
        self._members = frozenset(self.names)
        self._pending: Counter = Counter(self.names)

    @classmethod
    def from_file(cls, path: Path, consume: bool = False) -> "ExclusionList":
        """Read one class name per line; blank lines and '#' comments are ignored."""
        names = []
        for line in Path(path).read_text(encoding='utf-8').splitlines():
            line = line.split('#', 1)[0].strip()
            if line:
                names.append(line)
        return cls(names, consume=consume)

    @property
    def is_pure(self) -> bool:
        return not self.consume

    def __contains__(self, class_name: str) -> bool:
        return class_name in self._members

    def check(self, class_name: str) -> bool:
        """Return True if the class is excluded (consuming an entry in consume mode)."""
        if not self.consume:
            return class_name in self

        if self._pending[class_name] > 0:
            self._pending[class_name] -= 1
            return True
        return False

    def remaining(self, excluded: Iterable[str] = ()) -> List[str]:
        """
        Listed entries that never excluded a class.

        Args:
            excluded: Names of the classes that were excluded; only needed in
                      pure mode, where checks leave no state behind
        """
        if not self.consume:
            return sorted(self._members - set(excluded))
        return sorted(self._pending.elements())


@dataclass
class ClassOutcome:
    """What happened to one exposed class."""
    name: str
    compiled: Optional[ClassDescriptor] = None
    excluded: bool = False
    skipped_reason: Optional[str] = None


class StubCompiler:
    """
    Compile merged member lists for every exposed class.

    Example:
        >>> compiler = StubCompiler(
        ...     JsonDescriptorProvider(Path("exposed.json")),
        ...     docs=JsonDocumentationSource(Path("docs/pages")),
        ...     exclusions=ExclusionList(["zombie.Internal"])
        ... )
        >>> result = compiler.compile()
    """

    def __init__(
        self,
        provider: DescriptorProvider,
        docs: Optional[DocumentationSource] = None,
        exclusions: Optional[ExclusionList] = None,
        observer: Optional[DiagnosticObserver] = None,
    ):
        """
        Initialize the compiler and read the exposed classes.

        Args:
            provider: Source of reflective class descriptors
            docs: Documentation source (None to compile from reflection only)
            exclusions: Classes to leave out
            observer: Receives diagnostics (default: forward to logging)

        Raises:
            StartupFailure: If the provider cannot supply descriptors
        """
        logger.debug("Initializing StubCompiler...")
        self.exposed_classes: List[ReflectedClass] = list(provider.load_classes())
        self.docs = docs
        self.exclusions = exclusions or ExclusionList()
        self.observer = observer or log_diagnostic
        self.reconciler = MemberReconciler(observer=self.observer)

    def _emit(self, kind: DiagnosticKind, class_name: str, message: str):
        self.observer(Diagnostic(kind=kind, class_name=class_name, message=message))

    def _get_page(self, class_name: str, class_path: str) -> PageLookup:
        if self.docs is None:
            return NoDocument()

        logger.debug(f"Getting API page for class \"{class_path}\"")
        try:
            page = self.docs.get_page(class_path)
        except DocumentLookupError as e:
            self._emit(DiagnosticKind.LOOKUP_FAILED, class_name, str(e))
            return NoDocument(f"lookup failed for {class_path}")

        if isinstance(page, NoDocument):
            self._emit(
                DiagnosticKind.NO_DOCUMENTATION, class_name,
                f"Unable to find API page for path {class_path}"
            )
        return page

    def _compile_class(self, cls: ReflectedClass) -> ClassOutcome:
        class_path = class_path_for(cls.name)
        if not class_path:
            reason = f"Unable to find path for class \"{cls.name}\", might be an internal class"
            self._emit(DiagnosticKind.NO_CLASS_PATH, cls.name, reason)
            return ClassOutcome(name=cls.name, skipped_reason=reason)

        logger.info(f"Compiling exposed class {cls.name}...")
        page = self._get_page(cls.name, class_path)

        try:
            merged = self.reconciler.reconcile_class(cls, page)
        except DetailParsingError as e:
            reason = f"Error occurred while compiling members for document {e.document}: {e}"
            self._emit(DiagnosticKind.CLASS_SKIPPED, cls.name, reason)
            return ClassOutcome(name=cls.name, skipped_reason=reason)

        source = page.document.name if isinstance(page, DocumentFound) else "reflection only"
        self._emit(
            DiagnosticKind.CLASS_COMPILED, cls.name,
            f"Compiled class {cls.name} with {len(merged.fields)} fields and "
            f"{len(merged.methods)} methods ({source})"
        )
        return ClassOutcome(name=cls.name, compiled=merged)

    def _exclude(self, cls: ReflectedClass) -> Optional[ClassOutcome]:
        if self.exclusions.check(cls.name):
            self._emit(DiagnosticKind.CLASS_EXCLUDED, cls.name, f"Excluding exposed class {cls.name}")
            return ClassOutcome(name=cls.name, excluded=True)
        return None

    def _assemble(self, outcomes: List[ClassOutcome]) -> CompilationResult:
        result = CompilationResult(total=len(outcomes))
        seen = set()
        for outcome in outcomes:
            if outcome.excluded:
                result.excluded.append(outcome.name)
            elif outcome.skipped_reason is not None:
                result.skipped.append(SkippedClass(name=outcome.name, reason=outcome.skipped_reason))
            elif outcome.name in seen:
                reason = f"Duplicate of already compiled class {outcome.name}"
                self._emit(DiagnosticKind.DUPLICATE_CLASS, outcome.name, reason)
                result.skipped.append(SkippedClass(name=outcome.name, reason=reason))
            else:
                seen.add(outcome.name)
                result.classes.append(outcome.compiled)

        result.unused_exclusions = self.exclusions.remaining(result.excluded)

        logger.info(f"Finished compiling {len(result.classes)}/{result.total} classes")
        return result

    def compile(self) -> CompilationResult:
        """
        Compile all exposed classes sequentially, in provider order.

        Returns:
            CompilationResult with merged classes, exclusions and skipped classes
        """
        logger.info("Start compiling exposed classes...")
        outcomes = []
        for cls in self.exposed_classes:
            outcomes.append(self._exclude(cls) or self._compile_class(cls))
        return self._assemble(outcomes)

    async def _worker(self, worker_id: int, queue: asyncio.Queue, outcomes: Dict[int, ClassOutcome]):
        while True:
            try:
                index, cls = queue.get_nowait()
            except asyncio.QueueEmpty:
                break

            try:
                outcomes[index] = await asyncio.to_thread(self._compile_class, cls)
            finally:
                queue.task_done()

        logger.debug(f"Worker {worker_id} finished")

    async def compile_concurrent(self, num_workers: int = 5) -> CompilationResult:
        """
        Compile exposed classes with a pool of workers.

        Documentation lookups are blocking, so each class is reconciled in a
        worker thread. Result order matches provider order.

        Args:
            num_workers: Number of parallel workers (default: 5)

        Raises:
            ValueError: If the exclusion list consumes entries (order dependent)
        """
        if not self.exclusions.is_pure:
            raise ValueError("Concurrent compilation requires a non-consuming exclusion list")
        if num_workers < 1:
            raise ValueError(f"num_workers must be at least 1, got {num_workers}")

        logger.info(f"Start compiling exposed classes with {num_workers} workers...")
        outcomes: Dict[int, ClassOutcome] = {}
        queue: asyncio.Queue = asyncio.Queue()

        for index, cls in enumerate(self.exposed_classes):
            excluded = self._exclude(cls)
            if excluded is not None:
                outcomes[index] = excluded
            else:
                queue.put_nowait((index, cls))

        workers = [
            asyncio.create_task(self._worker(worker_id, queue, outcomes))
            for worker_id in range(num_workers)
        ]
        await asyncio.gather(*workers)

        return self._assemble([outcomes[index] for index in sorted(outcomes)])
