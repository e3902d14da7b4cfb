from app.attributes import Route


class AdminController:
    @Route(method='GET', path='/admin')
    def dashboard(self):
        return None

    @Route(method='DELETE', path='/admin/cache')
    @staticmethod
    def flush():
        return None
