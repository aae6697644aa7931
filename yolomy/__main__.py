from yolomy.main import run

run()
