"""Wire codecs for the SmartLink cloud API."""
