"""面板公用样式"""

CARD_STYLE = """
    {name} {{ background-color: #ffffff; border: 1px solid #e0e0e0; border-radius: 8px; }}
    #panelTitle {{ font-size: 14px; font-weight: bold; color: #333333; }}
"""


def card_style(name: str, extra: str = "") -> str:
    """白底圆角卡片样式，extra 为面板自己的规则"""
    return CARD_STYLE.format(name=name) + extra
