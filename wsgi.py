from careerzoom import create_app

app = create_app()
