"""コマンドラインインターフェース。"""
