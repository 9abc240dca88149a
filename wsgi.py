from flow_pool.main import create_app

app = create_app()
