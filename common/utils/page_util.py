from typing import Any, Dict, List, Optional


def build_page(data_list: List[Any], next_offset: Optional[int], total_num: int) -> Dict[str, Any]:
    """
    Build paginated response data

    @param data_list: items of current page
    @param next_offset: offset of next page, None if current page is the last one
    @param total_num: total number of items
    @return: page dict
    """
    return {
        "data": data_list,
        "total_num": total_num,
        "next_offset": next_offset,
    }


def normalize_limit(limit, default: int, maximum: int) -> int:
    """
    Clamp page limit into (0, maximum], falling back to default
    """
    if not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0:
        return default
    if limit > maximum:
        return maximum
    return limit


def next_offset_of(offset: int, limit: int, total_num: int) -> Optional[int]:
    end = offset + limit
    return end if end < total_num else None
