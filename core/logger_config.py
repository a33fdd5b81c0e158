import logging
import os
from logging.handlers import RotatingFileHandler

from core.config import config

LOG_FORMAT = "%(asctime)s - %(name)s - P%(process)d - %(threadName)s - %(levelname)s - %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    設定並返回一個 logger，同時輸出到控制台與日誌檔案。

    日誌檔案存放在 config.LOG_DIR 指定的資料夾中，並具備自動輪替功能。
    若 config.LOG_TO_FILE 為 False（例如測試時），只輸出到控制台。

    Args:
        name (str): Logger 的名稱，也將用作日誌檔名 (例如 'five_grids')。

    Returns:
        logging.Logger: 已設定好的 logger 物件。
    """
    # 同名 logger 在同一個程式中只會有一個實例
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    # 防止重複加入 handler
    if logger.hasHandlers():
        return logger

    log_format = logging.Formatter(LOG_FORMAT)

    if config.LOG_TO_FILE:
        if not os.path.exists(config.LOG_DIR):
            os.makedirs(config.LOG_DIR)

        log_file = os.path.join(config.LOG_DIR, f"{name}.log")
        file_handler = RotatingFileHandler(
            filename=log_file,
            maxBytes=10 * 1024 * 1024,  # 每個檔案最大 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(log_format)
        logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(log_format)
    logger.addHandler(stream_handler)

    return logger
