from .json_multi_encoder import JSONMultiEncoder
