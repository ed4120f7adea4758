"""
Category Lookup Tables

Static category → ID / Chinese name tables used by the naming formatter
when a record carries a category label but no catalogue identifier.
Unknown categories resolve to Misc / 杂项.
"""

from __future__ import annotations

from typing import Dict

DEFAULT_CATEGORY = "Misc"

CATEGORY_ID_MAP: Dict[str, str] = {
    "Ambience": "AMB",
    "Impact": "IMP",
    "Foley": "FOL",
    "Voice": "VOX",
    "Music": "MUS",
    "Interface": "UI",
    "Weapon": "WPN",
    "Vehicle": "VEH",
    "Creature": "CRE",
    "Magic": "MAG",
    "Footstep": "FST",
    "Door": "DOR",
    "Mechanism": "MCH",
    "Explosion": "EXP",
    "Weather": "WTH",
    "Nature": "NAT",
    "Cloth": "CLT",
    "Metal": "MTL",
    "Wood": "WOD",
    "Glass": "GLS",
    "Stone": "STN",
    "Water": "WTR",
    "Fire": "FIR",
    "Wind": "WND",
    "Electricity": "ELC",
    "Button": "BTN",
    "Notification": "NTF",
    "Alarm": "ALM",
    "Beep": "BEP",
    "Whoosh": "WSH",
    "Sci-Fi": "SCI",
    "Horror": "HOR",
    "Fantasy": "FNT",
    "Cartoon": "CTN",
    "Human": "HUM",
    "Animal": "ANM",
    "Robot": "ROB",
    "Monster": "MON",
    "Insect": "INS",
    "Bird": "BRD",
    "Debris": "DBR",
    "Destruction": "DST",
    "Cinematic": "CIN",
    "Transition": "TRN",
    "Stinger": "STG",
    "Loop": "LOP",
    "Oneshot": "ONE",
    "Misc": "MSC",
    "TEST": "TEST",
    "ARCHIVED": "ARCH",
}

CATEGORY_ZH_MAP: Dict[str, str] = {
    "Ambience": "环境",
    "Impact": "撞击",
    "Foley": "拟音",
    "Voice": "语音",
    "Music": "音乐",
    "Interface": "界面",
    "Weapon": "武器",
    "Vehicle": "载具",
    "Creature": "生物",
    "Magic": "魔法",
    "Footstep": "脚步",
    "Door": "门",
    "Mechanism": "机械",
    "Explosion": "爆炸",
    "Weather": "天气",
    "Nature": "自然",
    "Cloth": "布料",
    "Metal": "金属",
    "Wood": "木头",
    "Glass": "玻璃",
    "Stone": "石头",
    "Water": "水",
    "Fire": "火",
    "Wind": "风",
    "Electricity": "电",
    "Button": "按钮",
    "Notification": "通知",
    "Alarm": "警报",
    "Beep": "蜂鸣",
    "Whoosh": "呼啸",
    "Sci-Fi": "科幻",
    "Horror": "恐怖",
    "Fantasy": "奇幻",
    "Cartoon": "卡通",
    "Human": "人类",
    "Animal": "动物",
    "Robot": "机器人",
    "Monster": "怪物",
    "Insect": "昆虫",
    "Bird": "鸟类",
    "Debris": "碎片",
    "Destruction": "破坏",
    "Cinematic": "电影",
    "Transition": "过渡",
    "Stinger": "短音",
    "Loop": "循环",
    "Oneshot": "单次",
    "Misc": "杂项",
    "TEST": "测试",
    "ARCHIVED": "归档",
}

_ID_BY_LOWER = {name.lower(): value for name, value in CATEGORY_ID_MAP.items()}
_ZH_BY_LOWER = {name.lower(): value for name, value in CATEGORY_ZH_MAP.items()}


def get_category_id(category: object) -> str:
    """Category label → short ID, "MSC" when unknown."""
    if not isinstance(category, str):
        return CATEGORY_ID_MAP[DEFAULT_CATEGORY]
    return _ID_BY_LOWER.get(category.strip().lower(), CATEGORY_ID_MAP[DEFAULT_CATEGORY])


def get_category_chinese_name(category: object) -> str:
    """Category label → Chinese name, "杂项" when unknown."""
    if not isinstance(category, str):
        return CATEGORY_ZH_MAP[DEFAULT_CATEGORY]
    return _ZH_BY_LOWER.get(category.strip().lower(), CATEGORY_ZH_MAP[DEFAULT_CATEGORY])
