"""
Member reconciliation between reflective and documented class members.

Reflection reports exact member sets but loses generic type arguments to
erasure. Documentation keeps generic arguments but is often out of date. The
reconciler takes the member set from reflection and, where erasure makes a
type ambiguous, the type information from a documented member proven to be
the same member.
"""

from typing import Dict, List, Optional, Tuple
import logging

from stubrecon.diagnostics import Diagnostic, DiagnosticKind, DiagnosticObserver, log_diagnostic
from stubrecon.docs import DocumentFound, PageLookup
from stubrecon.matching import find_matching_method
from stubrecon.schemas import ClassDescriptor, FieldDescriptor, MethodDescriptor, ReflectedClass

logger = logging.getLogger(__name__)


class MemberReconciler:
    """
    Merge reflective and documented members of a class.

    Example:
        >>> reconciler = MemberReconciler()
        >>> merged = reconciler.reconcile_class(reflected, source.get_page(path))
        >>> print([str(f) for f in merged.fields])
    """

    def __init__(self, observer: Optional[DiagnosticObserver] = None):
        """
        Initialize the reconciler.

        Args:
            observer: Receives a Diagnostic for every fallback decision
                      (default: forward to logging)
        """
        self.observer = observer or log_diagnostic

    def _emit(self, kind: DiagnosticKind, class_name: str, message: str, member: Optional[str] = None):
        self.observer(Diagnostic(kind=kind, class_name=class_name, message=message, member=member))

    def reconcile_fields(self, cls: ReflectedClass, page: PageLookup) -> List[FieldDescriptor]:
        """
        Resolve the field list of a class.

        Fields whose type declares no type parameters are taken from
        reflection as-is. Parameterized fields use the documented entry when
        its type is the same erased type, otherwise an erasure placeholder.

        Args:
            cls: Reflective class descriptor
            page: Documentation lookup result for the class

        Returns:
            Fields unique by name, in reflective order

        Raises:
            DetailParsingError: If the documented field section is malformed
        """
        logger.debug(f"Start compiling fields of {cls.name}...")
        result: Dict[str, FieldDescriptor] = {}

        for field in cls.fields:
            # synthetic fields are generated by the compiler for internal purposes
            if field.synthetic:
                continue
            if field.name in result:
                logger.debug(f"Ignoring duplicate reflective field {cls.name}.{field.name}")
                continue

            if not field.type.is_generic:
                result[field.name] = field.to_descriptor()
                continue

            logger.debug(f"Field {field.name} has {len(field.type.type_parameters)} type parameters")
            placeholder = FieldDescriptor(
                name=field.name,
                type=field.type.to_type().erasure(),
                modifiers=field.modifiers
            )
            resolved = placeholder

            if isinstance(page, DocumentFound):
                document = page.document
                documented = document.lookup_field(field.name)
                if documented is None:
                    self._emit(
                        DiagnosticKind.FIELD_UNDOCUMENTED, cls.name,
                        f"Didn't find matching field \"{field.name}\" in document \"{document.name}\"",
                        member=field.name
                    )
                elif documented.type.equals(placeholder.type, qualified=True):
                    resolved = documented.with_modifiers(placeholder.modifiers)
                else:
                    self._emit(
                        DiagnosticKind.FIELD_MISMATCH, cls.name,
                        f"Documented field \"{field.name}\" in \"{document.name}\" has type "
                        f"{documented.type}, expected {placeholder.type}",
                        member=field.name
                    )

            result[field.name] = resolved

        logger.debug(f"Finished compiling {len(result)} fields of {cls.name}")
        return list(result.values())

    def reconcile_methods(self, cls: ReflectedClass, page: PageLookup) -> List[MethodDescriptor]:
        """
        Resolve the method list of a class.

        Each reflective method is matched against the documented overloads
        sharing its name; the first overload whose parameter types are equal
        under qualified comparison replaces it.

        Args:
            cls: Reflective class descriptor
            page: Documentation lookup result for the class

        Returns:
            Methods unique by signature, in reflective order

        Raises:
            DetailParsingError: If the documented method section is malformed
        """
        logger.debug(f"Start compiling methods of {cls.name}...")
        result: Dict[Tuple[str, Tuple[str, ...]], MethodDescriptor] = {}

        for method in cls.methods:
            if method.synthetic:
                logger.debug(f"Found synthetic method {method.name}, will not compile")
                continue

            resolved = method.to_descriptor()

            if isinstance(page, DocumentFound):
                document = page.document
                matched = find_matching_method(document.lookup_methods(method.name), resolved, qualified=True)
                if matched is not None:
                    resolved = matched
                else:
                    self._emit(
                        DiagnosticKind.METHOD_UNDOCUMENTED, cls.name,
                        f"Didn't find matching method \"{method.name}\" in document \"{document.name}\"",
                        member=method.name
                    )

            result.setdefault(resolved.signature_key(), resolved)

        logger.debug(f"Finished compiling {len(result)} methods of {cls.name}")
        return list(result.values())

    def reconcile_class(self, cls: ReflectedClass, page: PageLookup) -> ClassDescriptor:
        """
        Build the merged descriptor of one class.

        Raises:
            DetailParsingError: Propagated from field or method reconciliation;
                                no partial descriptor is produced
        """
        fields = self.reconcile_fields(cls, page)
        methods = self.reconcile_methods(cls, page)
        return ClassDescriptor(
            name=cls.name,
            modifiers=cls.modifiers,
            fields=tuple(fields),
            methods=tuple(methods)
        )
