class Estimator:
    """ 模型估计器基类 """

    def __init__(self):
        pass

    def initialize(self, data):
        """ 在迭代开始前，对输入的数据集做一次性的预处理 """
        pass

    def sampleSize(self):
        """ 估计模型所需的最小样本的大小 """
        pass

    def nonMinimalSampleSize(self):
        """ 估计模型所需的非最小样本的大小 """
        pass

    def estimateModel(self,
                      data,
                      sample):
        """ 给定一组数据，估计最小样本模型

        参数
        ----------
        data : list
            输入的数据集
        sample : list
            用于估计模型的样本序号列表

        返回
        ----------
        list(Model)
            通过样本估计的模型列表，样本退化时为空列表
        """
        pass

    def estimateModelNonminimal(self,
                                data,
                                sample,
                                sample_number,
                                weights=None):
        """ 根据数据集的非最小采样估计模型
            在加权最小二乘的情况下，权重可以输入到函数中

        参数
        ----------
        data : list
            输入的数据集
        sample : list
            用于估计模型的样本序号列表
        sample_number : int
            样本数目
        weights : list
            数据集中每个数据的对应权重

        返回
        ----------
        list(Model)
            通过样本估计的模型列表
        """
        pass

    def residuals(self, model):
        """ 给定模型，计算 initialize 中数据集全部数据的误差 """
        pass

    def squaredResiduals(self, model):
        """ 给定模型，计算全部数据误差的平方 """
        return self.residuals(model) ** 2

    def isValidSample(self, data, sample):
        """ 在计算模型参数之前判断所选样本是否退化 """
        return True
