"""
Multicall calldata formatting.

A list of N calls is flattened into the layout account contracts expect:

    [N,
     (to, selector, data_offset, data_len) for each call,
     total_data_len,
     *data of every call, in call order]
"""
from typing import Any, Iterable, List, Mapping, Sequence, Union

from .exceptions import CalldataFormatError
from .felt import FieldElement
from .models import Call
from .utils import get_selector_from_name

CallLike = Union[Call, Mapping[str, Any], Sequence[Any]]


def _is_numeric_literal(text: str) -> bool:
    text = text.strip()
    return text[:2].lower() == "0x" or text.isdigit()


def _to_call(index: int, raw: CallLike) -> Call:
    if isinstance(raw, Call):
        return raw
    try:
        if isinstance(raw, Mapping):
            return Call.model_validate(raw)
        if isinstance(raw, (tuple, list)):
            if len(raw) != 3:
                raise CalldataFormatError(
                    f"Call {index} must be (contract_address, selector, calldata), got {len(raw)} items"
                )
            contract_address, selector, data = raw
            if isinstance(selector, str) and not _is_numeric_literal(selector):
                selector = get_selector_from_name(selector)
            return Call(contract_address=contract_address, selector=selector, calldata=tuple(data))
    except CalldataFormatError:
        raise
    except (ValueError, TypeError) as e:
        raise CalldataFormatError(f"Call {index} is malformed: {e}") from e
    raise CalldataFormatError(f"Call {index} has unsupported type {type(raw).__name__}")


def fmt_calldata(calls: Iterable[CallLike]) -> List[FieldElement]:
    """
    Flatten calls into the multicall calldata layout.

    Args:
        calls: Call models, mappings with Call fields, or
               (contract_address, selector_or_function_name, calldata) tuples

    Returns:
        Flat list of field elements

    Raises:
        CalldataFormatError: If a call is missing fields or holds invalid values
    """
    if calls is None or isinstance(calls, (str, bytes, Mapping)):
        raise CalldataFormatError("Calls must be a sequence of calls")

    call_array: List[FieldElement] = []
    data: List[FieldElement] = []
    count = 0
    for index, raw in enumerate(calls):
        call = _to_call(index, raw)
        call_array.extend([
            call.contract_address,
            call.selector,
            FieldElement(len(data)),
            FieldElement(len(call.calldata)),
        ])
        data.extend(call.calldata)
        count += 1

    return [FieldElement(count), *call_array, FieldElement(len(data)), *data]
