"""
六十四卦数据

键为六位二进制字符串，按起卦顺序排列：第一位是初爻（最下面一爻），
'1' 为阳爻，'0' 为阴爻。前三位是下卦，后三位是上卦。
"""
from typing import Any, Dict, List, Optional

FALLBACK_NAME = "未知卦象"
FALLBACK_DESCRIPTION = "卦象信息未找到"

# 八卦（自下而上）
TRIGRAMS: Dict[str, Dict[str, str]] = {
    "111": {"name": "乾", "image": "天"},
    "000": {"name": "坤", "image": "地"},
    "100": {"name": "震", "image": "雷"},
    "011": {"name": "巽", "image": "风"},
    "010": {"name": "坎", "image": "水"},
    "101": {"name": "离", "image": "火"},
    "001": {"name": "艮", "image": "山"},
    "110": {"name": "兑", "image": "泽"},
}

HEXAGRAMS: Dict[str, Dict[str, Any]] = {
    "111111": {"number": 1, "name": "乾为天", "description": "天行健，君子以自强不息"},
    "000000": {"number": 2, "name": "坤为地", "description": "地势坤，君子以厚德载物"},
    "100010": {"number": 3, "name": "水雷屯", "description": "云雷屯，君子以经纶"},
    "010001": {"number": 4, "name": "山水蒙", "description": "山下出泉，蒙，君子以果行育德"},
    "111010": {"number": 5, "name": "水天需", "description": "云上于天，需，君子以饮食宴乐"},
    "010111": {"number": 6, "name": "天水讼", "description": "天与水违行，讼，君子以作事谋始"},
    "010000": {"number": 7, "name": "地水师", "description": "地中有水，师，君子以容民畜众"},
    "000010": {"number": 8, "name": "水地比", "description": "地上有水，比，先王以建万国，亲诸侯"},
    "111011": {"number": 9, "name": "风天小畜", "description": "风行天上，小畜，君子以懿文德"},
    "110111": {"number": 10, "name": "天泽履", "description": "上天下泽，履，君子以辨上下，定民志"},
    "111000": {"number": 11, "name": "地天泰", "description": "天地交，泰，后以财成天地之道，辅相天地之宜"},
    "000111": {"number": 12, "name": "天地否", "description": "天地不交，否，君子以俭德辟难，不可荣以禄"},
    "101111": {"number": 13, "name": "天火同人", "description": "天与火，同人，君子以类族辨物"},
    "111101": {"number": 14, "name": "火天大有", "description": "火在天上，大有，君子以遏恶扬善，顺天休命"},
    "001000": {"number": 15, "name": "地山谦", "description": "地中有山，谦，君子以裒多益寡，称物平施"},
    "000100": {"number": 16, "name": "雷地豫", "description": "雷出地奋，豫，先王以作乐崇德"},
    "100110": {"number": 17, "name": "泽雷随", "description": "泽中有雷，随，君子以向晦入宴息"},
    "011001": {"number": 18, "name": "山风蛊", "description": "山下有风，蛊，君子以振民育德"},
    "110000": {"number": 19, "name": "地泽临", "description": "泽上有地，临，君子以教思无穷，容保民无疆"},
    "000011": {"number": 20, "name": "风地观", "description": "风行地上，观，先王以省方观民设教"},
    "100101": {"number": 21, "name": "火雷噬嗑", "description": "雷电噬嗑，先王以明罚敕法"},
    "101001": {"number": 22, "name": "山火贲", "description": "山下有火，贲，君子以明庶政，无敢折狱"},
    "000001": {"number": 23, "name": "山地剥", "description": "山附于地，剥，上以厚下安宅"},
    "100000": {"number": 24, "name": "地雷复", "description": "雷在地中，复，先王以至日闭关"},
    "100111": {"number": 25, "name": "天雷无妄", "description": "天下雷行，物与无妄，先王以茂对时，育万物"},
    "111001": {"number": 26, "name": "山天大畜", "description": "天在山中，大畜，君子以多识前言往行，以畜其德"},
    "100001": {"number": 27, "name": "山雷颐", "description": "山下有雷，颐，君子以慎言语，节饮食"},
    "011110": {"number": 28, "name": "泽风大过", "description": "泽灭木，大过，君子以独立不惧，遁世无闷"},
    "010010": {"number": 29, "name": "坎为水", "description": "水洊至，习坎，君子以常德行，习教事"},
    "101101": {"number": 30, "name": "离为火", "description": "明两作，离，大人以继明照于四方"},
    "001110": {"number": 31, "name": "泽山咸", "description": "山上有泽，咸，君子以虚受人"},
    "011100": {"number": 32, "name": "雷风恒", "description": "雷风，恒，君子以立不易方"},
    "001111": {"number": 33, "name": "天山遁", "description": "天下有山，遁，君子以远小人，不恶而严"},
    "111100": {"number": 34, "name": "雷天大壮", "description": "雷在天上，大壮，君子以非礼弗履"},
    "000101": {"number": 35, "name": "火地晋", "description": "明出地上，晋，君子以自昭明德"},
    "101000": {"number": 36, "name": "地火明夷", "description": "明入地中，明夷，君子以莅众，用晦而明"},
    "101011": {"number": 37, "name": "风火家人", "description": "风自火出，家人，君子以言有物，而行有恒"},
    "110101": {"number": 38, "name": "火泽睽", "description": "上火下泽，睽，君子以同而异"},
    "001010": {"number": 39, "name": "水山蹇", "description": "山上有水，蹇，君子以反身修德"},
    "010100": {"number": 40, "name": "雷水解", "description": "雷雨作，解，君子以赦过宥罪"},
    "110001": {"number": 41, "name": "山泽损", "description": "山下有泽，损，君子以惩忿窒欲"},
    "100011": {"number": 42, "name": "风雷益", "description": "风雷，益，君子以见善则迁，有过则改"},
    "111110": {"number": 43, "name": "泽天夬", "description": "泽上于天，夬，君子以施禄及下，居德则忌"},
    "011111": {"number": 44, "name": "天风姤", "description": "天下有风，姤，后以施命诰四方"},
    "000110": {"number": 45, "name": "泽地萃", "description": "泽上于地，萃，君子以除戎器，戒不虞"},
    "011000": {"number": 46, "name": "地风升", "description": "地中生木，升，君子以顺德，积小以高大"},
    "010110": {"number": 47, "name": "泽水困", "description": "泽无水，困，君子以致命遂志"},
    "011010": {"number": 48, "name": "水风井", "description": "木上有水，井，君子以劳民劝相"},
    "101110": {"number": 49, "name": "泽火革", "description": "泽中有火，革，君子以治历明时"},
    "011101": {"number": 50, "name": "火风鼎", "description": "木上有火，鼎，君子以正位凝命"},
    "100100": {"number": 51, "name": "震为雷", "description": "洊雷，震，君子以恐惧修省"},
    "001001": {"number": 52, "name": "艮为山", "description": "兼山，艮，君子以思不出其位"},
    "001011": {"number": 53, "name": "风山渐", "description": "山上有木，渐，君子以居贤德善俗"},
    "110100": {"number": 54, "name": "雷泽归妹", "description": "泽上有雷，归妹，君子以永终知敝"},
    "101100": {"number": 55, "name": "雷火丰", "description": "雷电皆至，丰，君子以折狱致刑"},
    "001101": {"number": 56, "name": "火山旅", "description": "山上有火，旅，君子以明慎用刑，而不留狱"},
    "011011": {"number": 57, "name": "巽为风", "description": "随风，巽，君子以申命行事"},
    "110110": {"number": 58, "name": "兑为泽", "description": "丽泽，兑，君子以朋友讲习"},
    "010011": {"number": 59, "name": "风水涣", "description": "风行水上，涣，先王以享于帝立庙"},
    "110010": {"number": 60, "name": "水泽节", "description": "泽上有水，节，君子以制数度，议德行"},
    "110011": {"number": 61, "name": "风泽中孚", "description": "泽上有风，中孚，君子以议狱缓死"},
    "001100": {"number": 62, "name": "雷山小过", "description": "山上有雷，小过，君子以行过乎恭，丧过乎哀，用过乎俭"},
    "101010": {"number": 63, "name": "水火既济", "description": "水在火上，既济，君子以思患而豫防之"},
    "010101": {"number": 64, "name": "火水未济", "description": "火在水上，未济，君子以慎辨物居方"},
}


def _describe(key: str, hexagram: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "key": key,
        "lower_trigram": TRIGRAMS[key[:3]]["name"],
        "upper_trigram": TRIGRAMS[key[3:]]["name"],
        **hexagram
    }


def get_all_hexagrams() -> List[Dict[str, Any]]:
    """按卦序返回全部六十四卦（附带键和上下卦）"""
    result = [_describe(key, hexagram) for key, hexagram in HEXAGRAMS.items()]
    return sorted(result, key=lambda item: item["number"])


def get_hexagram_by_key(key: str) -> Optional[Dict[str, Any]]:
    """按二进制键查找卦，找不到返回 None"""
    if not isinstance(key, str):
        return None
    return HEXAGRAMS.get(key)


def describe_hexagram(key: str) -> Optional[Dict[str, Any]]:
    """同 get_hexagram_by_key，附带键和上下卦"""
    hexagram = get_hexagram_by_key(key)
    if hexagram is None:
        return None
    return _describe(key, hexagram)
