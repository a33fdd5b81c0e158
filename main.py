from util.entries import Character
from util.name_fivegrid_wuxing import analyze_five_grids


def read_strokes(char: str):
    raw = input(f"請輸入「{char}」的筆畫數（不知道請直接按 Enter）...")
    try:
        return int(raw)
    except ValueError:
        return None


def build_entries(name: str, read=read_strokes):
    """姓名中的空白不算字，不會詢問筆畫"""
    return [Character(value=char, strokes=read(char)) for char in name if not char.isspace()]


# This is the console entry for trying out five grid analysis
def main():
    name = input("五格測試中，請輸入您的姓名...")

    while name.lower() != "bye":
        print(analyze_five_grids(build_entries(name))["report"])

        name = input("請繼續輸入姓名(或輸入 'bye' 結束)...")

if __name__ == "__main__":
    main()
