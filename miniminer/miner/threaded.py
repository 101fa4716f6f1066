from threading import Event, Thread


class Threaded(Thread):
    def __init__(self, terminate_flag: Event = None):
        super().__init__(daemon=True)

        # Threads can share a flag so setting it once ends all of them
        if terminate_flag is None:
            terminate_flag = Event()

        self.terminate_flag = terminate_flag
