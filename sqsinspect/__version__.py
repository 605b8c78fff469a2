__application_name__ = "sqsinspect"
__title__ = __application_name__
__author__ = "abel"
__version__ = "0.1.0"
__author_email__ = "j@abel.co"
__url__ = "https://github.com/jamesabel/sqsinspect"
__download_url__ = "https://github.com/jamesabel/sqsinspect"
__description__ = "drain an AWS SQS queue and dump its messages as human readable JSON"
