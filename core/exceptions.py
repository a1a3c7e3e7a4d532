"""
自定義異常類別

集中管理所有計分異常。這些異常只在 core / services 內部流動，
ScoreboardManager 與 GameDataStore 的公開操作會接住它們並記錄 log，
不會讓輸入錯誤或資料損毀中斷計分。
"""


class VierBureException(Exception):
    """所有計分異常的基類"""
    pass


# ============ Score 相關異常 ============

class InvalidScoreValue(VierBureException):
    """Top 分數輸入不是整數"""
    def __init__(self, raw_value):
        self.raw_value = raw_value
        super().__init__(f"Invalid score value: {raw_value!r}")


# ============ 持久化相關異常 ============

class DataCorruption(VierBureException):
    """儲存的遊戲資料無法解析"""
    def __init__(self, key, reason=None):
        self.key = key
        self.reason = reason
        message = f"Stored data for {key} appears to be corrupted"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
